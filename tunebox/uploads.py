"""
Розбір тіла ``multipart/form-data`` форми завантаження музики та збереження файлу.

Форма містить текстове поле ``music_name`` та рівно одне файлове поле;
якщо файлових полів кілька, використовується перше.
"""
import io
import logging
import os
from collections import namedtuple

from flask import current_app
from werkzeug.formparser import MultiPartParser
from werkzeug.http import parse_options_header

from tunebox.errors import ValidationError

logger = logging.getLogger(__name__)

MusicUpload = namedtuple('MusicUpload', ['name', 'filename', 'payload'])


def parse_multipart(body, content_type):
    """
    Розбирає сире тіло запиту.

    :param body: Байти тіла запиту.
    :type body: bytes
    :param content_type: Значення заголовка ``Content-Type`` разом із ``boundary``.
    :type content_type: str
    :return: Пара ``(form, files)`` з ``MultiDict``.
    :raises ValidationError: Якщо тіло не є коректним multipart.
    """
    mimetype, options = parse_options_header(content_type or "")
    boundary = options.get("boundary")
    if mimetype != "multipart/form-data" or not boundary:
        raise ValidationError("malformed multipart body")
    parser = MultiPartParser()
    try:
        return parser.parse(io.BytesIO(body), boundary.encode("latin-1"), len(body))
    except ValueError as e:
        logger.debug("multipart parse error: %s", e)
        raise ValidationError("malformed multipart body")


def extract_upload(body, content_type):
    """
    Дістає назву треку, ім'я вихідного файлу та його вміст.

    :rtype: MusicUpload
    :raises ValidationError: Якщо назва або файл відсутні.
    """
    form, files = parse_multipart(body, content_type)
    name = form.get("music_name", "").rstrip("\r")
    logger.debug("music_name: %s", name)
    file = next(iter(files.values()), None)
    filename = file.filename if file is not None and file.filename else ""
    logger.debug("music_file: %s", filename)
    if not name:
        raise ValidationError.required("music_name")
    if not filename:
        raise ValidationError.required("music_file")
    return MusicUpload(name, filename, file.read())


def file_extension(filename):
    """Розширення файлу у нижньому регістрі, разом із крапкою."""
    # only the extension of the client name is kept
    return os.path.splitext(filename)[1].lower()


def allowed_extensions():
    return [ext.strip() for ext in current_app.config["ALLOWED_MUSIC_EXTENSIONS"].split(",")]


def music_folder():
    return os.path.join(current_app.config["STATIC_ROOT"], current_app.config["MUSIC_SUBDIR"])


def music_url(music_file):
    """Публічна адреса файлу, збереженого у :func:`music_folder`."""
    return f"/statics/{current_app.config['MUSIC_SUBDIR']}/{music_file}"


def save_music_file(music_file, payload):
    path = os.path.join(music_folder(), music_file)
    with open(path, "wb") as fd:
        fd.write(payload)
    logger.debug("music written to %s (%d bytes)", path, len(payload))
    return path
