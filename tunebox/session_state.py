"""
Стан клієнта у сесії: поточний користувач, лічильники, останній трек.

Значення читаються копіями, тож посилання, отримане з сесії, не змінюється
після додавання нових ключів. Порядок оновлень у обробниках зберігається:
спершу створюються нові ключі, потім читаються наявні.
"""
import copy

from flask import session

USER_KEY = "user"
MUSIC_KEY = "music"

PRIVATE_USER_FIELDS = ("password",)


class SessionState:
    """
    Обгортка над відображенням сесії.

    :param store: Змінюване відображення; за замовчуванням ``flask.session``.
    """

    def __init__(self, store=None):
        self._store = session if store is None else store

    def get(self, key, default=None):
        if key not in self._store:
            return default
        return copy.deepcopy(self._store[key])

    def set(self, key, value):
        self._store[key] = copy.deepcopy(value)

    def is_authenticated(self):
        return USER_KEY in self._store

    @property
    def user(self):
        return self.get(USER_KEY)

    def login(self, user_record):
        """Зберігає копію запису користувача без хешу пароля."""
        record = {k: v for k, v in user_record.items() if k not in PRIVATE_USER_FIELDS}
        self.set(USER_KEY, record)

    def logout(self):
        self._store.pop(USER_KEY, None)

    def increment_counter(self, key):
        if key not in self._store:
            self._store[key] = 0
        value = int(self._store[key]) + 1
        self._store[key] = value
        return value

    @property
    def music(self):
        return self.get(MUSIC_KEY)

    def remember_music(self, music_view):
        self.set(MUSIC_KEY, music_view)
