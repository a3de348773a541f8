import json
import os
import shutil
import tempfile
import unittest
from datetime import datetime
from unittest import mock

from simple_websocket import ConnectionClosed

from tunebox import handlers, queries
from tunebox.errors import (DuplicateUser, InvalidCredentials, NotFound,
                            RelationMismatch, ValidationError)
from tunebox.init import create_app, db
from tunebox.models import Music, MusicianRole, User
from tunebox.pagination import paginate
from tunebox.relations import MUSIC, USER, Relation
from tunebox.session_state import SessionState
from tunebox.uploads import extract_upload, file_extension

BOUNDARY = "----tuneboxboundary"


def multipart_body(name, filename=None, payload=b"", boundary=BOUNDARY):
    """Тіло форми завантаження: поле ``music_name`` та (необов'язково) файл."""
    lines = [
        b"--" + boundary.encode(),
        b'Content-Disposition: form-data; name="music_name"',
        b"",
        name.encode(),
    ]
    if filename is not None:
        lines += [
            b"--" + boundary.encode(),
            b'Content-Disposition: form-data; name="music_file"; filename="' + filename.encode() + b'"',
            b"Content-Type: audio/mpeg",
            b"",
            payload,
        ]
    lines += [b"--" + boundary.encode() + b"--", b""]
    return b"\r\n".join(lines), "multipart/form-data; boundary=" + boundary


class FakeResult:
    def __init__(self, rows):
        self.rows = rows

    def first(self):
        return self.rows[0] if self.rows else None

    def __iter__(self):
        return iter(self.rows)


class TestPagination(unittest.TestCase):
    """
    Тестування обчислення пагінації (Core Logic)
    """

    def test_total_pages_is_ceiling(self):
        """Кількість сторінок округлюється вгору"""
        self.assertEqual(paginate(1, 1)["total"], 1)
        self.assertEqual(paginate(10, 1)["total"], 1)
        self.assertEqual(paginate(11, 1)["total"], 2)
        self.assertEqual(paginate(95, 1)["total"], 10)

    def test_no_items_no_pagination(self):
        """Порожній список не має пагінації"""
        self.assertIsNone(paginate(0, 1))

    def test_first_and_last_page_neighbours(self):
        first = paginate(30, 1)
        self.assertNotIn("previous", first)
        self.assertEqual(first["next"], 2)

        last = paginate(30, 3)
        self.assertEqual(last["previous"], 2)
        self.assertNotIn("next", last)

    def test_middle_window_without_left_ellipsis(self):
        """95 записів, сторінка 5: ліве вікно згортається до 1"""
        p = paginate(95, 5)
        self.assertEqual(p["total"], 10)
        self.assertEqual(p["current"], 5)
        self.assertEqual(p["previous"], 4)
        self.assertEqual(p["next"], 6)
        self.assertNotIn("left_ellipsis", p)
        self.assertEqual(p["pages_left"], [1, 2, 3, 4])
        self.assertTrue(p["right_ellipsis"])
        self.assertEqual(p["pages_right"], [6, 7, 8])

    def test_window_with_both_ellipses(self):
        """200 записів, сторінка 10: обидва три крапки"""
        p = paginate(200, 10)
        self.assertEqual(p["total"], 20)
        self.assertTrue(p["left_ellipsis"])
        self.assertTrue(p["right_ellipsis"])
        self.assertEqual(p["pages_left"], [7, 8, 9])
        self.assertEqual(p["pages_right"], [11, 12, 13])

    def test_window_near_the_end(self):
        p = paginate(200, 19)
        self.assertTrue(p["left_ellipsis"])
        self.assertNotIn("right_ellipsis", p)
        self.assertEqual(p["pages_left"], [16, 17, 18])
        self.assertEqual(p["pages_right"], [20])

    def test_invariants(self):
        """Сусідні сторінки та три крапки для всіх допустимих сторінок"""
        for total_items in range(1, 260, 7):
            total_pages = -(-total_items // 10)
            for page_id in range(1, total_pages + 1):
                p = paginate(total_items, page_id)
                self.assertEqual(p["total"], total_pages)
                self.assertEqual("previous" not in p, page_id == 1)
                self.assertEqual("next" not in p, page_id == total_pages)
                self.assertEqual("left_ellipsis" in p, page_id - 3 > 2)
                self.assertEqual("right_ellipsis" in p, page_id + 3 < total_pages - 1)
                self.assertTrue(all(n < page_id for n in p["pages_left"]))
                self.assertTrue(all(page_id < n <= total_pages for n in p["pages_right"]))

    def test_page_size(self):
        self.assertEqual(paginate(25, 1, page_size=5)["total"], 5)


class TestRelation(unittest.TestCase):
    """
    Тестування позиційного відображення рядків
    """

    def test_fields_applied_by_position(self):
        row = (3, "bob", "Song", "3.mp3", 1)
        music = MUSIC.convert_row(row)
        self.assertEqual(music, {
            "music_id": 3,
            "musician": "bob",
            "music_name": "Song",
            "music_path": "3.mp3",
            "is_active": True,
        })

    def test_column_count_mismatch_fails(self):
        """Невідповідність кількості стовпців має піднімати помилку"""
        with self.assertRaises(RelationMismatch):
            MUSIC.convert_row((3, "bob", "Song"))

    def test_null_stays_none(self):
        relation = Relation(("id", int), ("note", str))
        self.assertEqual(relation.convert_row((1, None)), {"id": 1, "note": None})

    def test_optional_and_list(self):
        relation = Relation(("id", int), ("name", str))
        self.assertIsNone(relation.convert_to_optional(FakeResult([])))
        self.assertEqual(relation.convert_to_optional(FakeResult([("7", "x")])), {"id": 7, "name": "x"})
        self.assertEqual(
            relation.convert_to_list(FakeResult([(1, "a"), (2, "b")])),
            [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}])

    def test_user_relation_fields(self):
        self.assertEqual([f.name for f in USER.fields][-1], "is_musician")


class TestSessionState(unittest.TestCase):
    """
    Тестування стану сесії
    """

    def setUp(self):
        self.store = {}
        self.state = SessionState(self.store)

    def test_login_logout(self):
        self.assertFalse(self.state.is_authenticated())
        self.state.login({"id": 1, "username": "alice", "password": "hash"})
        self.assertTrue(self.state.is_authenticated())
        self.assertEqual(self.state.user, {"id": 1, "username": "alice"})

        self.state.logout()
        self.assertFalse(self.state.is_authenticated())
        # повторний вихід нічого не ламає
        self.state.logout()
        self.assertNotIn("user", self.store)

    def test_login_overwrites_previous_user(self):
        self.state.login({"id": 1, "username": "alice"})
        self.state.login({"id": 2, "username": "bob"})
        self.assertEqual(self.state.user["username"], "bob")

    def test_increment_counter(self):
        self.assertEqual(self.state.increment_counter("count"), 1)
        self.assertEqual(self.state.increment_counter("count"), 2)
        self.assertEqual(self.state.increment_counter("cnt"), 1)
        self.assertEqual(self.store, {"count": 2, "cnt": 1})

    def test_reads_are_copies(self):
        """Змінення прочитаного значення не змінює сесію"""
        self.state.login({"id": 1, "username": "alice"})
        user = self.state.user
        self.state.increment_counter("count")
        user["username"] = "mallory"
        self.assertEqual(self.state.user["username"], "alice")


class FakeWebSocket:
    def __init__(self, frames):
        self.frames = list(frames)
        self.sent = []

    def send(self, data):
        self.sent.append(data)

    def receive(self):
        if not self.frames:
            raise ConnectionClosed()
        return self.frames.pop(0)


class TestWebSocketEcho(unittest.TestCase):
    """
    Тестування websocket-echo
    """

    def test_sends_counter_then_echoes(self):
        """Спершу лічильник cnt у JSON, далі кожне повідомлення без змін"""
        state = SessionState({"cnt": 3})
        ws = FakeWebSocket(["hello", "{\"a\": 1}", ""])
        handlers.ws_echo(ws, state)
        self.assertEqual(ws.sent, [json.dumps(3), "hello", "{\"a\": 1}", ""])

    def test_missing_counter_is_null(self):
        ws = FakeWebSocket([])
        handlers.ws_echo(ws, SessionState({}))
        self.assertEqual(ws.sent, ["null"])


class DatabaseTestCase(unittest.TestCase):
    """Окремий застосунок із базою в пам'яті та тимчасовим каталогом статики."""

    def setUp(self):
        self.static_root = tempfile.mkdtemp()
        self.app = create_app({
            "TESTING": True,
            "SECRET_KEY": "test",
            "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
            "STATIC_ROOT": self.static_root,
        })
        self.music_dir = os.path.join(self.static_root, "musics")

    def tearDown(self):
        with self.app.app_context():
            db.session.remove()
            db.drop_all()
        shutil.rmtree(self.static_root, ignore_errors=True)

    def make_user(self, username, password="pw123", musician=False, active=True):
        with self.app.app_context():
            user_id = queries.register_user(username, password)
            user = db.session.get(User, user_id)
            user.is_active = active
            if musician:
                user.is_musician = int(MusicianRole.MUSICIAN)
            db.session.commit()
            return user_id

    def make_music(self, musician_id, name="Song", active=True):
        with self.app.app_context():
            music = Music(musician_id=musician_id, music_name=name, music_path="x.mp3", is_active=active)
            db.session.add(music)
            db.session.commit()
            return music.music_id


class TestQueries(DatabaseTestCase):
    """
    Тестування запитів до бази даних
    """

    def test_register_and_get_user(self):
        self.make_user("alice")
        with self.app.app_context():
            user = queries.get_user("alice")
            self.assertEqual(user["username"], "alice")
            self.assertFalse(user["is_superuser"])
            self.assertTrue(user["is_active"])
            self.assertEqual(user["is_musician"], MusicianRole.REGULAR)
            self.assertNotEqual(user["password"], "pw123")
            self.assertIsNone(queries.get_user("nobody"))

    def test_duplicate_user(self):
        """Повторна реєстрація не змінює перший запис"""
        self.make_user("alice", "pw123")
        with self.app.app_context():
            with self.assertRaises(DuplicateUser):
                queries.register_user("alice", "other", first_name="Eve")
            db.session.rollback()
            user = queries.authenticate("alice", "pw123")
            self.assertEqual(user["first_name"], "")
            self.assertEqual(queries.count_users(), 1)

    def test_duplicate_user_race(self):
        """Дубль, який пройшов перевірку, відхиляється обмеженням унікальності"""
        self.make_user("alice", "pw123")
        with self.app.app_context():
            with mock.patch("tunebox.queries.get_user", return_value=None):
                with self.assertRaises(DuplicateUser):
                    queries.register_user("alice", "other")
            self.assertEqual(queries.count_users(), 1)
            queries.authenticate("alice", "pw123")

    def test_invalid_credentials_are_uniform(self):
        """Хибний пароль, неактивний та невідомий користувач: одне повідомлення"""
        self.make_user("alice", "pw123")
        self.make_user("sleepy", "pw123", active=False)
        with self.app.app_context():
            messages = []
            for username, password in [("alice", "wrong"), ("sleepy", "pw123"), ("ghost", "pw123")]:
                with self.assertRaises(InvalidCredentials) as cm:
                    queries.authenticate(username, password)
                messages.append(cm.exception.message)
            self.assertEqual(len(set(messages)), 1)
            self.assertEqual(messages[0], "invalid username/password")

    def test_list_users_pages(self):
        for i in range(15):
            self.make_user(f"user{i:02d}")
        with self.app.app_context():
            total, users = queries.list_users(2)
            self.assertEqual(total, 15)
            self.assertEqual([u["username"] for u in users], [f"user{i:02d}" for i in range(10, 15)])

    def test_list_active_music(self):
        owner = self.make_user("bob", musician=True)
        self.make_music(owner, "Visible")
        self.make_music(owner, "Hidden", active=False)
        with self.app.app_context():
            total, music = queries.list_active_music(1)
            self.assertEqual(total, 1)
            self.assertEqual(music[0]["music_name"], "Visible")
            self.assertEqual(music[0]["musician"], "bob")

    def test_get_music_inactive(self):
        owner = self.make_user("bob", musician=True)
        hidden = self.make_music(owner, active=False)
        with self.app.app_context():
            with self.assertRaises(NotFound):
                queries.get_music(hidden)
            with self.assertRaises(NotFound):
                queries.get_music(999)

    def test_create_music_names_file_by_id(self):
        owner = self.make_user("bob", musician=True)
        with self.app.app_context():
            first = queries.create_music(owner, "One", ".mp3")
            second = queries.create_music(owner, "Two", ".ogg")
            db.session.commit()
            self.assertEqual(first, "1.mp3")
            self.assertEqual(second, "2.ogg")

    def test_comments_in_storage_order(self):
        owner = self.make_user("bob", musician=True)
        music_id = self.make_music(owner)
        with self.app.app_context():
            queries.add_comment(owner, music_id, "first", datetime(2024, 1, 2, 3, 4, 5))
            queries.add_comment(owner, music_id, "second", datetime(2024, 1, 1))
            db.session.commit()
            comments = queries.list_comments(music_id)
            self.assertEqual([c["comment_content"] for c in comments], ["first", "second"])
            self.assertEqual(comments[0]["username"], "bob")
            self.assertTrue(comments[0]["comment_time"].startswith("2024-01-02 03:04:05"))


class TestUploads(unittest.TestCase):
    """
    Тестування розбору multipart-форми
    """

    def test_extract_upload(self):
        payload = b"ID3\x00\x01\r\nbinary\r\n\xff"
        body, content_type = multipart_body("My Song", "track.MP3", payload)
        upload = extract_upload(body, content_type)
        self.assertEqual(upload.name, "My Song")
        self.assertEqual(upload.filename, "track.MP3")
        self.assertEqual(upload.payload, payload)
        self.assertEqual(file_extension(upload.filename), ".mp3")

    def test_extension_of_non_ascii_name(self):
        """Кирилична назва файлу не втрачає розширення"""
        self.assertEqual(file_extension("пісня.MP3"), ".mp3")
        self.assertEqual(file_extension("no_extension"), "")

    def test_missing_name(self):
        body, content_type = multipart_body("", "track.mp3", b"data")
        with self.assertRaises(ValidationError) as cm:
            extract_upload(body, content_type)
        self.assertEqual(cm.exception.message, "`music_name` is required")

    def test_missing_file(self):
        body, content_type = multipart_body("My Song")
        with self.assertRaises(ValidationError) as cm:
            extract_upload(body, content_type)
        self.assertEqual(cm.exception.message, "`music_file` is required")

    def test_not_multipart(self):
        with self.assertRaises(ValidationError):
            extract_upload(b"music_name=x", "application/x-www-form-urlencoded")


class TestHttpApi(DatabaseTestCase):
    """
    Тестування JSON-маршрутів через тестовий клієнт
    """

    def setUp(self):
        super().setUp()
        self.client = self.app.test_client()

    def login(self, username, password="pw123"):
        return self.client.post("/login", data={"username": username, "password": password}).get_json()

    def upload(self, name="My Song", filename="track.mp3", payload=b"music-bytes"):
        body, content_type = multipart_body(name, filename, payload)
        return self.client.post("/add_music", data=body, content_type=content_type)

    def test_register_and_login(self):
        """Реєстрація alice/pw123, вхід з правильним та хибним паролем"""
        res = self.client.post("/register", data={"username": "alice", "password": "pw123"}).get_json()
        self.assertEqual(res, {"success": True, "message": "user registered"})

        res = self.client.post("/register", data={"username": "alice", "password": "again"}).get_json()
        self.assertEqual(res, {"success": False, "message": "`username` existed"})

        self.assertEqual(self.login("alice", "wrong"), {"success": False, "message": "invalid username/password"})
        self.assertEqual(self.login("alice"), {"success": True, "message": "login successfully"})

    def test_required_fields(self):
        res = self.client.post("/register", data={"username": "alice"}).get_json()
        self.assertEqual(res, {"success": False, "message": "`password` is required"})
        res = self.client.post("/register", data={"username": "", "password": "x"}).get_json()
        self.assertEqual(res, {"success": False, "message": "`username` is required"})
        res = self.client.post("/login", data={"password": "x"}).get_json()
        self.assertEqual(res, {"success": False, "message": "`username` is required"})

    def test_actions_require_post(self):
        """GET на маршрут дії відповідає 404"""
        self.assertEqual(self.client.get("/register?username=a&password=b").status_code, 404)
        self.assertEqual(self.client.get("/login").status_code, 404)
        self.assertEqual(self.client.get("/form_add_user").status_code, 404)
        with self.app.app_context():
            self.assertEqual(queries.count_users(), 0)

    def test_hello_counter(self):
        self.assertEqual(self.client.get("/hello").get_json(), {"msg": "hello, world!"})
        self.make_user("alice")
        self.login("alice")
        self.assertEqual(self.client.get("/hello").get_json(), {"welcome": "alice", "count": 1})
        self.assertEqual(self.client.get("/hello").get_json(), {"welcome": "alice", "count": 2})

    def test_logout(self):
        self.make_user("alice")
        self.login("alice")
        res = self.client.get("/logout").get_json()
        self.assertEqual(res, {"success": True, "message": "logout successfully"})
        self.assertEqual(self.client.get("/hello").get_json(), {"msg": "hello, world!"})
        # вихід без входу теж успішний
        self.assertTrue(self.client.get("/logout").get_json()["success"])

    def test_session_user_has_no_password(self):
        self.make_user("alice")
        self.login("alice")
        with self.client.session_transaction() as sess:
            self.assertEqual(sess["user"]["username"], "alice")
            self.assertNotIn("password", sess["user"])

    def test_find_user(self):
        self.make_user("alice")
        res = self.client.get("/find/alice").get_json()
        self.assertTrue(res["success"])
        self.assertEqual(res["user"]["username"], "alice")
        self.assertNotIn("id", res["user"])
        self.assertNotIn("password", res["user"])

        res = self.client.get("/find/ghost").get_json()
        self.assertEqual(res, {"success": False, "message": "requested user does not exist"})

    def test_upload_requires_login(self):
        res = self.upload()
        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.get_json(), {"success": False, "message": "please login first"})

    def test_upload_by_regular_user_is_denied(self):
        """Звичайний користувач не може завантажити трек: немає ні рядка, ні файлу"""
        self.make_user("alice")
        self.login("alice")
        res = self.upload().get_json()
        self.assertEqual(res, {"success": False, "message": "not musician"})
        with self.app.app_context():
            self.assertEqual(Music.query.count(), 0)
        self.assertEqual(os.listdir(self.music_dir), [])

    def test_upload_and_play(self):
        payload = b"ID3\x03\x00\r\n\x00\xffaudio"
        self.make_user("bob", musician=True)
        self.login("bob")
        res = self.upload(payload=payload).get_json()
        self.assertEqual(res, {"success": True, "message": "music added"})

        with open(os.path.join(self.music_dir, "1.mp3"), "rb") as fd:
            self.assertEqual(fd.read(), payload)

        music = self.client.get("/api/music/1").get_json()
        self.assertEqual(music["music"], {
            "music_id": 1,
            "music_name": "My Song",
            "musician": "bob",
            "music_path": "/statics/musics/1.mp3",
        })
        self.assertEqual(music["comments"], [])
        self.assertEqual(music["user"]["username"], "bob")

        res = self.client.get(music["music"]["music_path"])
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data, payload)
        self.assertEqual(res.headers["Accept-Ranges"], "bytes")
        res.close()

    def test_upload_cyrillic_filename(self):
        self.make_user("bob", musician=True)
        self.login("bob")
        res = self.upload(filename="пісня.mp3", payload=b"audio").get_json()
        self.assertEqual(res, {"success": True, "message": "music added"})
        self.assertEqual(os.listdir(self.music_dir), ["1.mp3"])

    def test_wrong_verb_before_login_check(self):
        """GET без входу на маршрути дій відповідає 404, а не 401"""
        self.assertEqual(self.client.get("/add_music").status_code, 404)
        self.assertEqual(self.client.get("/post_comment").status_code, 404)

    def test_upload_rejects_unknown_extension(self):
        self.make_user("bob", musician=True)
        self.login("bob")
        res = self.upload(filename="notes.txt").get_json()
        self.assertEqual(res, {"success": False, "message": "unsupported music file type"})
        self.assertEqual(os.listdir(self.music_dir), [])

    def test_upload_missing_name(self):
        self.make_user("bob", musician=True)
        self.login("bob")
        res = self.upload(name="").get_json()
        self.assertEqual(res, {"success": False, "message": "`music_name` is required"})

    def test_missing_music(self):
        owner = self.make_user("bob", musician=True)
        hidden = self.make_music(owner, active=False)
        res = self.client.get(f"/api/music/{hidden}").get_json()
        self.assertEqual(res["success"], False)
        self.assertEqual(res["message"], "no such music")
        self.assertNotIn("music", res)

    def test_post_comment(self):
        owner = self.make_user("bob", musician=True)
        music_id = self.make_music(owner)
        self.login("bob")
        self.client.get(f"/api/music/{music_id}")

        res = self.client.post("/post_comment", data={"comment_box": "great track"}).get_json()
        self.assertEqual(res, {"success": True, "message": "comment posted"})

        comments = self.client.get(f"/api/music/{music_id}").get_json()["comments"]
        self.assertEqual(len(comments), 1)
        self.assertEqual(comments[0]["username"], "bob")
        self.assertEqual(comments[0]["comment_content"], "great track")

    def test_post_comment_validation(self):
        owner = self.make_user("bob", musician=True)
        music_id = self.make_music(owner)
        self.login("bob")

        res = self.client.post("/post_comment", data={"comment_box": "early"}).get_json()
        self.assertEqual(res, {"success": False, "message": "no such music"})

        self.client.get(f"/api/music/{music_id}")
        res = self.client.post("/post_comment", data={"comment_box": "x" * 251}).get_json()
        self.assertEqual(res, {"success": False, "message": "`comment_box` is too long"})
        res = self.client.post("/post_comment", data={}).get_json()
        self.assertEqual(res, {"success": False, "message": "`comment_box` is required"})

    def test_users_listing(self):
        for i in range(12):
            self.make_user(f"user{i:02d}")
        res = self.client.get("/api/users/1").get_json()
        self.assertEqual(len(res["users"]), 10)
        self.assertTrue(all("password" not in u for u in res["users"]))
        self.assertEqual(res["pagination"], {
            "total": 2,
            "next": 2,
            "current": 1,
            "pages_left": [],
            "pages_right": [2],
        })
        self.assertNotIn("user", res)
        self.assertEqual(self.client.get("/api/users/0").status_code, 404)

    def test_empty_music_repo(self):
        res = self.client.get("/api/music_repo/1").get_json()
        self.assertEqual(res, {"music_repo": []})

    def test_echo(self):
        res = self.client.post("/echo", json={"msg": "request"}).get_json()
        self.assertEqual(res, {"echo": {"msg": "request"}})

    @mock.patch("tunebox.handlers.requests.post")
    def test_send_request(self, post):
        post.return_value.json.return_value = {"echo": {"request": {"a": "1"}}}
        res = self.client.post("/send", data={"a": "1"}).get_json()
        self.assertEqual(res, {"response": {"echo": {"request": {"a": "1"}}}, "cnt": 1})
        res = self.client.post("/send", data={"a": "1"}).get_json()
        self.assertEqual(res["cnt"], 2)
        args, kwargs = post.call_args
        self.assertEqual(args[0], "http://localhost:5000/echo")
        self.assertEqual(kwargs["json"], {"request": {"a": "1"}})


class TestPages(DatabaseTestCase):
    """
    Тестування HTML-сторінок
    """

    def setUp(self):
        super().setUp()
        self.client = self.app.test_client()

    def test_index(self):
        res = self.client.get("/")
        self.assertEqual(res.status_code, 200)
        self.assertIn(b"Sign in", res.data)

    def test_form_login_and_logout(self):
        self.make_user("alice")
        res = self.client.post("/form_login", data={"username": "alice", "password": "pw123"})
        self.assertIn(b"login successfully", res.data)
        self.assertIn(b"Welcome, alice", res.data)

        res = self.client.post("/form_logout")
        self.assertIn(b"logout successfully", res.data)
        self.assertIn(b"Sign in", res.data)

    def test_form_add_user(self):
        res = self.client.post("/form_add_user", data={"username": "carol", "password": "pw", "email": "c@x.org"})
        self.assertEqual(res.status_code, 200)
        self.assertIn(b"user registered", res.data)
        self.assertIn(b"c@x.org", res.data)

    def test_form_add_music_and_comment(self):
        self.make_user("bob", musician=True)
        self.client.post("/form_login", data={"username": "bob", "password": "pw123"})
        body, content_type = multipart_body("Night Drive", "drive.ogg", b"OggS")
        res = self.client.post("/form_add_music", data=body, content_type=content_type)
        self.assertIn(b"music added", res.data)
        self.assertIn(b"Night Drive", res.data)

        res = self.client.get("/music/1")
        self.assertIn(b"/statics/musics/1.ogg", res.data)

        res = self.client.post("/form_post_comment", data={"comment_box": "lovely"})
        self.assertIn(b"comment posted", res.data)
        self.assertIn(b"lovely", res.data)


class TestCli(DatabaseTestCase):
    """
    Тестування команд CLI
    """

    def test_set_musician(self):
        self.make_user("alice")
        runner = self.app.test_cli_runner()
        result = runner.invoke(args=["set-musician", "alice"])
        self.assertIn("alice: musician", result.output)
        with self.app.app_context():
            self.assertEqual(queries.get_user("alice")["is_musician"], MusicianRole.MUSICIAN)

        result = runner.invoke(args=["set-musician", "alice", "--revoke"])
        self.assertIn("alice: regular", result.output)

    def test_set_musician_unknown_user(self):
        result = self.app.test_cli_runner().invoke(args=["set-musician", "ghost"])
        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("requested user does not exist", result.output)


if __name__ == '__main__':
    unittest.main()
