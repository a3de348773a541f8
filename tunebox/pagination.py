import math

WINDOW = 3


def paginate(total_items, page_id, page_size=10):
    """
    Обчислює метадані пагінації зі «вікном» сусідніх сторінок.

    Номер сторінки не перевіряється відносно загальної кількості сторінок.
    Якщо сторінок немає зовсім, повертається ``None`` і пагінація не
    показується.

    :param total_items: Загальна кількість записів.
    :type total_items: int
    :param page_id: Поточна сторінка (нумерація з 1).
    :type page_id: int
    :param page_size: Кількість записів на сторінці.
    :type page_size: int
    :return: Словник із ключами ``total``, ``current``, ``previous``, ``next``,
        ``left_ellipsis``, ``right_ellipsis``, ``pages_left``, ``pages_right``
        (необов'язкові ключі відсутні, якщо не потрібні) або ``None``.
    :rtype: dict | None
    """
    total_pages = math.ceil(total_items / page_size)
    if total_pages == 0:
        return None

    pagination = {"total": total_pages}
    if page_id > 1:
        pagination["previous"] = page_id - 1
    if page_id < total_pages:
        pagination["next"] = page_id + 1

    lower = page_id - WINDOW
    upper = page_id + WINDOW
    if lower > 2:
        pagination["left_ellipsis"] = True
    else:
        lower = 1
    if upper < total_pages - 1:
        pagination["right_ellipsis"] = True
    else:
        upper = total_pages

    pagination["current"] = page_id
    pagination["pages_left"] = list(range(lower, page_id))
    pagination["pages_right"] = list(range(page_id + 1, upper + 1))
    return pagination


def page_offset(page_id, page_size=10):
    return (page_id - 1) * page_size
