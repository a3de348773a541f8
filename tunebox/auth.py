from flask import jsonify
from flask_login import UserMixin

from tunebox.errors import Unauthenticated
from tunebox.init import login_manager
from tunebox.models import MusicianRole
from tunebox.session_state import SessionState


class SessionUser(UserMixin):
    """Користувач Flask-Login, побудований з копії запису в сесії."""

    def __init__(self, record):
        self.record = record

    def get_id(self):
        return str(self.record["id"])

    @property
    def username(self):
        return self.record["username"]

    @property
    def is_active(self):
        return bool(self.record.get("is_active", True))

    @property
    def is_musician(self):
        return self.record.get("is_musician") == MusicianRole.MUSICIAN


@login_manager.request_loader
def load_user_from_session(request):
    """Відновлює ``current_user`` із запису, збереженого під ключем ``user``."""
    record = SessionState().user
    if record is None:
        return None
    return SessionUser(record)


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify(Unauthenticated().as_result()), 401
