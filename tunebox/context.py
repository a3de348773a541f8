"""Збирання контексту сторінок зі списків, пагінації та стану сесії."""
import logging

from flask import current_app

from tunebox import handlers, queries
from tunebox.pagination import paginate
from tunebox.session_state import PRIVATE_USER_FIELDS

logger = logging.getLogger(__name__)


def with_session_user(state, context):
    user = state.user
    if user is not None:
        context["user"] = user
    return context


def _public(record):
    return {k: v for k, v in record.items() if k not in PRIVATE_USER_FIELDS}


def users_context(state, page_id, context=None):
    """
    Контекст сторінки зі списком користувачів.

    :return: Словник із ключами ``users``, ``pagination`` (якщо є сторінки) та ``user``.
    """
    context = {} if context is None else context
    logger.debug("view users: %s", page_id)
    page_size = current_app.config["PAGE_SIZE"]
    total_users, users = queries.list_users(page_id, page_size)
    logger.debug("total users: %s", total_users)
    pagination = paginate(total_users, page_id, page_size)
    if pagination is not None:
        context["pagination"] = pagination
    context["users"] = [_public(user) for user in users]
    return with_session_user(state, context)


def music_repo_context(state, page_id, context=None):
    context = {} if context is None else context
    logger.debug("view music_repo: %s", page_id)
    page_size = current_app.config["PAGE_SIZE"]
    total_music, music_repo = queries.list_active_music(page_id, page_size)
    logger.debug("total music_repo: %s", total_music)
    pagination = paginate(total_music, page_id, page_size)
    if pagination is not None:
        context["pagination"] = pagination
    context["music_repo"] = music_repo
    return with_session_user(state, context)


def music_context(state, music_id, context=None):
    """
    Контекст сторінки треку: сам трек (якщо доступний) і коментарі до нього.

    Якщо трек не знайдено, у контекст потрапляє повідомлення про помилку.
    """
    context = {} if context is None else context
    logger.debug("view music: %s", music_id)
    result = handlers.load_music(music_id, state, context)
    if result.get("success") is False:
        context.update(result)
    context["comments"] = queries.list_comments(music_id)
    return with_session_user(state, context)
