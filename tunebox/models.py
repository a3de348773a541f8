import enum
from datetime import datetime

from tunebox.init import db


class MusicianRole(enum.IntEnum):
    """Значення прапорця ``is_musician`` у таблиці користувачів."""
    REGULAR = 0
    MUSICIAN = 2


class User(db.Model):
    """
    Модель користувача системи.
    Зберігає облікові дані, статус активності та роль музиканта.
    """
    __tablename__ = 'auth_user'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(150), unique=True, nullable=False)
    password = db.Column(db.String(256), nullable=False)
    is_superuser = db.Column(db.Boolean, nullable=False, default=False)
    first_name = db.Column(db.String(150), nullable=False, default='')
    last_name = db.Column(db.String(150), nullable=False, default='')
    email = db.Column(db.String(254), nullable=False, default='')
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    is_musician = db.Column(db.Integer, nullable=False, default=int(MusicianRole.REGULAR))
    tracks = db.relationship('Music', backref='owner', lazy=True)


class Music(db.Model):
    """
    Модель музичного треку.
    ``music_path`` зберігає лише ім'я файлу всередині каталогу музики;
    ``is_active = False`` означає м'яке видалення.
    """
    __tablename__ = 'music'

    music_id = db.Column(db.Integer, primary_key=True)
    musician_id = db.Column(db.Integer, db.ForeignKey('auth_user.id'), nullable=False)
    music_name = db.Column(db.String(200), nullable=False)
    music_path = db.Column(db.String(200), nullable=False, default='')
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    comments = db.relationship('Comment', backref='music', lazy=True)


class Comment(db.Model):
    """Коментар користувача до треку."""
    __tablename__ = 'comment'

    comment_id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('auth_user.id'), nullable=False)
    music_id = db.Column(db.Integer, db.ForeignKey('music.music_id'), nullable=False)
    comment_time = db.Column(db.DateTime, nullable=False, default=datetime.now)
    comment_content = db.Column(db.String(250), nullable=False)
