import logging
import os

from flask import Flask
from flask_login import LoginManager
from flask_sock import Sock
from flask_sqlalchemy import SQLAlchemy

basedir = os.path.abspath(os.path.dirname(__file__))

db = SQLAlchemy()
login_manager = LoginManager()
sock = Sock()


def create_app(config=None):
    """
    Створює та налаштовує Flask-застосунок.

    :param config: Словник, що перекриває типові налаштування (тести, продакшн).
    :type config: dict
    :return: Готовий застосунок із зареєстрованими маршрутами.
    :rtype: flask.Flask
    """
    app = Flask(__name__, static_folder=None)

    app.config.update({
        "SECRET_KEY": os.environ.get("TUNEBOX_SECRET_KEY", "secret-key-tunebox-123"),
        "SQLALCHEMY_DATABASE_URI": os.environ.get("TUNEBOX_DATABASE_URI", "sqlite:///tunebox.db"),
        "SQLALCHEMY_TRACK_MODIFICATIONS": False,
        "STATIC_ROOT": os.path.join(basedir, "statics"),
        "MUSIC_SUBDIR": "musics",
        "ALLOWED_MUSIC_EXTENSIONS": ".mp3,.wav,.flac,.ogg",
        "PAGE_SIZE": 10,
        "COMMENT_MAX_LENGTH": 250,
        "ECHO_URL": "http://localhost:5000/echo",
        "ECHO_TIMEOUT": 30,
        "LOG_LEVEL": "INFO",
    })

    if config:
        app.config.update(config)

    logging.basicConfig(level=app.config["LOG_LEVEL"])

    app.config["STATIC_ROOT"] = os.path.abspath(app.config["STATIC_ROOT"])
    os.makedirs(os.path.join(app.config["STATIC_ROOT"], app.config["MUSIC_SUBDIR"]), exist_ok=True)

    db.init_app(app)
    login_manager.init_app(app)
    sock.init_app(app)

    # models must be imported before create_all
    from tunebox import models  # noqa: F401
    from tunebox import auth, cli, routes  # noqa: F401
    cli.init_app(app)
    routes.init_app(app)

    with app.app_context():
        db.create_all()

    return app
