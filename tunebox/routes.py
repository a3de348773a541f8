import functools
import logging

from flask import (Blueprint, abort, current_app, jsonify, render_template,
                   request, send_from_directory)
from flask_login import login_required
from werkzeug import exceptions

from tunebox import handlers
from tunebox.context import (music_context, music_repo_context, users_context,
                             with_session_user)
from tunebox.errors import MethodNotAllowed
from tunebox.init import sock
from tunebox.session_state import SessionState

logger = logging.getLogger(__name__)

bp = Blueprint('tunebox', __name__)

ACTION_METHODS = ['GET', 'POST']


def request_params():
    """Параметри з рядка запиту, тіла форми та JSON-тіла."""
    params = request.values.to_dict()
    if request.is_json:
        params.update(request.get_json(silent=True) or {})
    return params


def render(template_name, context):
    """Рендерить шаблон, додаючи до контексту поточного користувача."""
    with_session_user(SessionState(), context)
    return render_template(template_name, **context)


def post_action(func):
    """Перевіряє HTTP-метод раніше за перевірку входу."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        handlers.require_post(request.method)
        return func(*args, **kwargs)
    return wrapper


def valid_page(page_id):
    if page_id < 1:
        abort(404)
    return page_id


# JSON API

@bp.route('/hello')
def hello():
    return jsonify(handlers.hello(SessionState()))


@bp.route('/register', methods=ACTION_METHODS)
def user_register():
    return jsonify(handlers.user_register(request.method, request_params()))


@bp.route('/login', methods=ACTION_METHODS)
def user_login():
    return jsonify(handlers.user_login(request.method, request_params(), SessionState()))


@bp.route('/logout')
def user_logout():
    return jsonify(handlers.user_logout(SessionState()))


@bp.route('/find/<username>')
def find_user(username):
    return jsonify(handlers.find_user(username))


@bp.route('/add_music', methods=ACTION_METHODS)
@post_action
@login_required
def add_music():
    # raw body is read before anything touches request.form
    body = request.get_data()
    return jsonify(handlers.add_music(request.method, body, request.content_type, SessionState()))


@bp.route('/post_comment', methods=ACTION_METHODS)
@post_action
@login_required
def post_comment():
    return jsonify(handlers.post_comment(request.method, request_params(), SessionState()))


@bp.route('/send', methods=ACTION_METHODS)
def send_request():
    return jsonify(handlers.send_request(request_params(), SessionState()))


@bp.route('/echo', methods=ACTION_METHODS)
def echo():
    return jsonify(handlers.echo(request_params()))


@bp.route('/api/users/<int:page_id>')
def api_users(page_id):
    return jsonify(users_context(SessionState(), valid_page(page_id)))


@bp.route('/api/music_repo/<int:page_id>')
def api_music_repo(page_id):
    return jsonify(music_repo_context(SessionState(), valid_page(page_id)))


@bp.route('/api/music/<int:music_id>')
def api_music(music_id):
    return jsonify(music_context(SessionState(), music_id))


@sock.route('/ws', bp=bp)
def ws_echo(ws):
    handlers.ws_echo(ws, SessionState())


@bp.route('/statics/<path:path>')
def serve_static_files(path):
    response = send_from_directory(current_app.config['STATIC_ROOT'], path)
    response.headers['Accept-Ranges'] = 'bytes'
    return response


# Pages

@bp.route('/')
def index():
    return render('index.html', {})


@bp.route('/form_login', methods=ACTION_METHODS)
def form_login():
    state = SessionState()
    context = handlers.user_login(request.method, request_params(), state)
    logger.info("login: %s", context)
    return render('index.html', context)


@bp.route('/form_logout', methods=ACTION_METHODS)
def form_logout():
    context = handlers.user_logout(SessionState())
    logger.info("logout: %s", context)
    return render('index.html', context)


@bp.route('/users/<int:page_id>')
def view_users(page_id):
    return render('users.html', users_context(SessionState(), valid_page(page_id)))


@bp.route('/form_add_user', methods=ACTION_METHODS)
def form_add_user():
    context = handlers.user_register(request.method, request_params())
    return render('users.html', users_context(SessionState(), 1, context))


@bp.route('/music_repo/<int:page_id>')
def view_music_repo(page_id):
    return render('music_repo.html', music_repo_context(SessionState(), valid_page(page_id)))


@bp.route('/form_add_music', methods=ACTION_METHODS)
def form_add_music():
    state = SessionState()
    body = request.get_data()
    context = handlers.add_music(request.method, body, request.content_type, state)
    return render('music_repo.html', music_repo_context(state, 1, context))


@bp.route('/music/<int:music_id>')
def view_music(music_id):
    return render('music.html', music_context(SessionState(), music_id))


@bp.route('/form_post_comment', methods=ACTION_METHODS)
def form_post_comment():
    state = SessionState()
    context = handlers.post_comment(request.method, request_params(), state)
    music = state.music
    if music is None:
        return render('index.html', context)
    return render('music.html', music_context(state, music["music_id"], context))


def method_not_allowed(e):
    logger.debug("method not allowed: %s", e)
    return exceptions.NotFound().get_response()


def init_app(app):
    app.register_blueprint(bp)
    app.register_error_handler(MethodNotAllowed, method_not_allowed)
