"""
Запити до бази даних для користувачів, музики та коментарів.

Читання виконуються параметризованим SQL і відображаються схемами з
:mod:`tunebox.relations`; запис одного рядка виконується через ORM-моделі.
Фіксацію транзакції виконує викликач.
"""
import logging

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from tunebox import relations
from tunebox.errors import DuplicateUser, InvalidCredentials, NotFound
from tunebox.init import db
from tunebox.models import Comment, Music, User
from tunebox.pagination import page_offset

logger = logging.getLogger(__name__)


def execute(sql, **params):
    logger.info("%s %s", sql, params)
    return db.session.execute(text(sql), params)


def get_user(username):
    """
    Шукає користувача за іменем.

    :return: Запис користувача або ``None``.
    :rtype: dict | None
    """
    result = execute(
        "select id, username, password, is_superuser, first_name, last_name,"
        " email, is_active, is_musician from auth_user where username = :username",
        username=username)
    return relations.USER.convert_to_optional(result)


def register_user(username, password, first_name="", last_name="", email=""):
    """
    Додає нового звичайного користувача.

    :raises DuplicateUser: Якщо ім'я вже зайняте.
    """
    if get_user(username) is not None:
        raise DuplicateUser()
    user = User(
        username=username,
        password=generate_password_hash(password),
        is_superuser=False,
        first_name=first_name,
        last_name=last_name,
        email=email,
        is_active=True,
    )
    db.session.add(user)
    try:
        db.session.flush()
    except IntegrityError:
        # concurrent registration of the same name
        db.session.rollback()
        raise DuplicateUser()
    logger.info("registered user %s (id=%s)", username, user.id)
    return user.id


def authenticate(username, password):
    """
    Перевіряє облікові дані.

    Для невідомого імені, неактивного облікового запису та хибного пароля
    піднімається одна й та сама помилка.

    :raises InvalidCredentials: Якщо вхід неможливий.
    """
    user = get_user(username)
    if user is None or not user["is_active"]:
        raise InvalidCredentials()
    if not check_password_hash(user["password"], password):
        raise InvalidCredentials()
    return user


def count_users():
    return execute("select count(*) from auth_user").scalar_one()


def list_users(page_id, page_size=10):
    total = count_users()
    result = execute(
        "select id, username, password, is_superuser, first_name, last_name,"
        " email, is_active, is_musician from auth_user limit :limit offset :offset",
        limit=page_size, offset=page_offset(page_id, page_size))
    return total, relations.USER.convert_to_list(result)


def create_music(musician_id, music_name, extension):
    """
    Додає рядок треку та призначає йому ім'я файлу ``<music_id><extension>``.

    Ідентифікатор видає база даних під час вставки, тому паралельні
    завантаження не отримують однакового імені файлу.

    :return: Ім'я файлу (без каталогу).
    :rtype: str
    """
    music = Music(musician_id=musician_id, music_name=music_name, music_path="")
    db.session.add(music)
    db.session.flush()
    music.music_path = f"{music.music_id}{extension}"
    db.session.flush()
    logger.debug("music_path: %s", music.music_path)
    return music.music_path


def count_active_music():
    return execute("select count(*) from music where is_active = :active", active=True).scalar_one()


def list_active_music(page_id, page_size=10):
    total = count_active_music()
    result = execute(
        "select music_id, username, music_name, music_path, music.is_active"
        " from music join auth_user on music.musician_id = auth_user.id"
        " where music.is_active = :active limit :limit offset :offset",
        active=True, limit=page_size, offset=page_offset(page_id, page_size))
    return total, relations.MUSIC.convert_to_list(result)


def get_music(music_id):
    """
    Повертає активний трек.

    :raises NotFound: Якщо трека немає або його м'яко видалено.
    """
    result = execute(
        "select music_id, username, music_name, music_path, music.is_active"
        " from music join auth_user on music.musician_id = auth_user.id"
        " where music_id = :music_id",
        music_id=music_id)
    music = relations.MUSIC.convert_to_optional(result)
    if music is None or not music["is_active"]:
        raise NotFound("no such music")
    return music


def add_comment(user_id, music_id, content, timestamp):
    comment = Comment(
        user_id=user_id,
        music_id=music_id,
        comment_time=timestamp,
        comment_content=content,
    )
    db.session.add(comment)
    db.session.flush()
    return comment.comment_id


def list_comments(music_id):
    result = execute(
        "select comment_id, username, comment_time, comment_content"
        " from comment join auth_user on comment.user_id = auth_user.id"
        " where music_id = :music_id",
        music_id=music_id)
    return relations.COMMENT.convert_to_list(result)


def set_musician_role(username, role):
    user = User.query.filter_by(username=username).first()
    if user is None:
        raise NotFound("requested user does not exist")
    user.is_musician = int(role)
    db.session.flush()
    return user
