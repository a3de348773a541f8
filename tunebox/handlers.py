"""
Обробники дій: реєстрація, вхід, завантаження музики, коментарі та echo-демо.

Кожен обробник повертає JSON-подібний словник. Доменні помилки
перетворюються на ``{"success": False, "message": ...}`` декоратором
:func:`tunebox.errors.reported`.
"""
import json
import logging
from datetime import datetime

import requests
from flask import current_app
from simple_websocket import ConnectionClosed

from tunebox import queries
from tunebox.errors import (MethodNotAllowed, NotFound, PermissionDenied,
                            Unauthenticated, ValidationError, reported)
from tunebox.init import db
from tunebox.models import MusicianRole
from tunebox.session_state import SessionState
from tunebox.uploads import (allowed_extensions, extract_upload, file_extension,
                             music_url, save_music_file)

logger = logging.getLogger(__name__)


def require_post(method):
    if method != "POST":
        raise MethodNotAllowed(method)


def require(params, field):
    value = params.get(field, "")
    if value == "":
        raise ValidationError.required(field)
    return value


def hello(state):
    if state.is_authenticated():
        # new keys first, then read the existing ones
        count = state.increment_counter("count")
        user = state.user
        return {"welcome": user["username"], "count": count}
    return {"msg": "hello, world!"}


@reported
def user_register(method, params):
    require_post(method)
    username = require(params, "username")
    password = require(params, "password")
    queries.register_user(
        username,
        password,
        first_name=params.get("first_name", ""),
        last_name=params.get("last_name", ""),
        email=params.get("email", ""),
    )
    db.session.commit()
    return {"success": True, "message": "user registered"}


@reported
def user_login(method, params, state):
    require_post(method)
    username = require(params, "username")
    password = require(params, "password")
    user = queries.authenticate(username, password)
    state.login(user)
    return {"success": True, "message": "login successfully"}


@reported
def find_user(username):
    user = queries.get_user(username)
    if user is None:
        raise NotFound("requested user does not exist")
    del user["id"]
    del user["password"]
    return {"success": True, "user": user}


def user_logout(state):
    state.logout()
    return {"success": True, "message": "logout successfully"}


@reported
def add_music(method, body, content_type, state):
    """
    Завантажує трек від імені поточного користувача-музиканта.

    Рядок у базі та файл на диску створюються лише після всіх перевірок;
    якщо запис файлу не вдався, транзакція відкочується.
    """
    require_post(method)
    if not state.is_authenticated():
        raise Unauthenticated()
    now_user = state.user
    if now_user.get("is_musician") != MusicianRole.MUSICIAN:
        raise PermissionDenied()

    upload = extract_upload(body, content_type)
    extension = file_extension(upload.filename)
    if extension not in allowed_extensions():
        raise ValidationError("unsupported music file type")

    music_file = queries.create_music(now_user["id"], upload.name, extension)
    try:
        save_music_file(music_file, upload.payload)
    except OSError:
        db.session.rollback()
        raise
    db.session.commit()
    return {"success": True, "message": "music added"}


@reported
def load_music(music_id, state, context=None):
    """
    Додає до контексту трек ``music_id`` і запам'ятовує його в сесії.

    :return: Контекст із ключем ``music``.
    :rtype: dict
    """
    context = {} if context is None else context
    music = queries.get_music(music_id)
    json_music = {
        "music_name": music["music_name"],
        "musician": music["musician"],
        "music_path": music_url(music["music_path"]),
        "music_id": music["music_id"],
    }
    logger.debug("music: %s", json_music)
    state.remember_music(json_music)
    context["music"] = json_music
    return context


@reported
def post_comment(method, params, state):
    """Коментує трек, який користувач переглядав останнім."""
    require_post(method)
    music = state.music
    if music is None:
        raise NotFound("no such music")
    if not state.is_authenticated():
        raise Unauthenticated()
    content = require(params, "comment_box")
    if len(content) > current_app.config["COMMENT_MAX_LENGTH"]:
        raise ValidationError("`comment_box` is too long")
    user = state.user
    queries.add_comment(user["id"], music["music_id"], content, datetime.now())
    db.session.commit()
    return {"success": True, "message": "comment posted"}


def send_request(params, state):
    """Надсилає параметри на ``ECHO_URL`` і повертає відповідь разом із лічильником ``cnt``."""
    res = requests.post(
        current_app.config["ECHO_URL"],
        json={"request": params},
        timeout=current_app.config["ECHO_TIMEOUT"],
    )
    res.raise_for_status()
    cnt = state.increment_counter("cnt")
    return {"response": res.json(), "cnt": cnt}


def echo(params):
    return {"echo": params}


def ws_echo(ws, state):
    """Надсилає лічильник ``cnt`` і повертає клієнту кожне отримане повідомлення."""
    ws.send(json.dumps(state.get("cnt")))
    while True:
        try:
            data = ws.receive()
        except ConnectionClosed:
            break
        ws.send(data)
