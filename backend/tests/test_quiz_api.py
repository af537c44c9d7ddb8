"""
Quiz listing and submission through the HTTP layer, for both user stores.
"""

import mongomock
import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from config import Settings
from main import create_app
from models.question import QuizQuestion
from store.mongo import MongoUserDirectory
from tests.conftest import login, register

ALL_CORRECT = {"1": 1, "2": 0, "3": 1}

INTERNAL_ERROR = {"error": "Internal server error"}

ANSWER_KEY_NAMES = ("correct_option_index", "correctOptionIndex", "answerIndex")


@pytest.fixture
def authed(client):
    register(client)
    return client


# ── Listing ────────────────────────────────────────────────────────────────


class TestListQuestions:

    def test_requires_session(self, client):
        res = client.get("/api/quiz/questions")
        assert res.status_code == 401
        assert res.json() == {"error": "Unauthorized. Please login."}

    def test_lists_catalog(self, authed):
        questions = authed.get("/api/quiz/questions").json()["questions"]
        assert [q["id"] for q in questions] == [1, 2, 3]
        assert questions[1] == {
            "id": 2,
            "prompt": "How many squares are on a chessboard?",
            "options": ["64", "72", "56", "48"],
        }

    def test_never_exposes_answer_key(self, authed):
        body = authed.get("/api/quiz/questions").text
        for name in ANSWER_KEY_NAMES:
            assert name not in body

    @pytest.mark.parametrize("size", [0, 1, 7])
    def test_never_exposes_answer_key_for_any_catalog(self, authed, monkeypatch, size):
        catalog = tuple(
            QuizQuestion(id=i, prompt=f"Q{i}", options=("a", "b", "c", "d"), correct_option_index=2)
            for i in range(size)
        )
        monkeypatch.setattr("routes.quiz.QUIZ_QUESTIONS", catalog)
        res = authed.get("/api/quiz/questions")
        assert len(res.json()["questions"]) == size
        for question in res.json()["questions"]:
            assert set(question) == {"id", "prompt", "options"}


# ── Submission ─────────────────────────────────────────────────────────────


class TestSubmit:

    def test_requires_session(self, client):
        assert client.post("/api/quiz/submit", json={"answers": ALL_CORRECT}).status_code == 401

    def test_all_correct(self, authed):
        res = authed.post("/api/quiz/submit", json={"answers": ALL_CORRECT})
        assert res.status_code == 200
        assert res.json() == {"score": 3, "total": 3, "message": "You scored 3/3"}

    def test_empty_answers(self, authed):
        res = authed.post("/api/quiz/submit", json={"answers": {}})
        assert res.json()["score"] == 0
        assert res.json()["total"] == 3

    def test_non_numeric_selection_is_ignored(self, authed):
        res = authed.post("/api/quiz/submit", json={"answers": {"1": "1", "2": None, "3": True}})
        assert res.status_code == 200
        assert res.json()["score"] == 0

    @pytest.mark.parametrize("body", [{}, {"answers": None}, {"answers": [1, 0, 1]}, {"answers": "1,0,1"}])
    def test_answers_must_be_a_mapping(self, authed, body):
        res = authed.post("/api/quiz/submit", json=body)
        assert res.status_code == 400
        assert res.json() == {"error": "Answers required"}

    def test_missing_body(self, authed):
        res = authed.post("/api/quiz/submit")
        assert res.status_code == 400
        assert res.json() == {"error": "Answers required"}

    def test_score_visible_in_me(self, authed):
        authed.post("/api/quiz/submit", json={"answers": {"1": 1}})
        assert authed.get("/api/me").json()["score"] == 1

    def test_resubmission_recomputes(self, authed):
        authed.post("/api/quiz/submit", json={"answers": ALL_CORRECT})
        res = authed.post("/api/quiz/submit", json={"answers": {"2": 0}})
        assert res.json()["score"] == 1
        assert authed.get("/api/me").json()["score"] == 1

    def test_score_written_to_user_record(self, authed, users):
        authed.post("/api/quiz/submit", json={"answers": ALL_CORRECT})
        assert users._users["alice"].score == 3


# ── Login score policy ─────────────────────────────────────────────────────


class TestLoginScorePolicy:

    def _submit_and_relogin(self, client):
        register(client)
        client.post("/api/quiz/submit", json={"answers": ALL_CORRECT})
        client.post("/api/logout")
        login(client)
        return client.get("/api/me").json()

    def test_restore_loads_stored_score(self, client):
        assert self._submit_and_relogin(client)["score"] == 3

    def test_reset_starts_at_zero(self, users, sessions):
        settings = Settings(BCRYPT_ROUNDS=4, LOGIN_SCORE_POLICY="reset")
        client = TestClient(create_app(settings, users=users, sessions=sessions))
        assert self._submit_and_relogin(client)["score"] == 0
        # the stored score is kept either way
        assert users._users["alice"].score == 3


class TestMongoBackedFlow:

    def setup_method(self):
        self.collection = mongomock.MongoClient().quizapp.users
        settings = Settings(BCRYPT_ROUNDS=4, USER_STORE="mongo")
        app = create_app(settings, users=MongoUserDirectory(self.collection))
        self.client = TestClient(app)

    def test_score_survives_relogin(self):
        with self.client:
            register(self.client)
            self.client.post("/api/quiz/submit", json={"answers": {"1": 1, "2": 0}})
            self.client.post("/api/logout")
            login(self.client)
            assert self.client.get("/api/me").json()["score"] == 2
        assert self.collection.find_one({"username": "alice"})["score"] == 2

    def test_duplicate_registration(self):
        assert register(self.client).status_code == 200
        assert register(self.client).status_code == 409
        assert self.collection.count_documents({}) == 1


class UnreachableCollection:
    """Stands in for a collection whose server cannot be reached."""

    full_name = "quizapp.users"

    def _fail(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("localhost:27017: connection refused")

    find_one = insert_one = update_one = create_index = _fail


class ScoreWriteFailsCollection:
    """Delegates to mongomock but fails every score update."""

    def __init__(self, collection):
        self._collection = collection

    def __getattr__(self, name):
        return getattr(self._collection, name)

    def update_one(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("primary stepped down")


class TestMongoStoreFailures:

    def test_login_with_store_down_is_json_500(self):
        app = create_app(Settings(BCRYPT_ROUNDS=4), users=MongoUserDirectory(UnreachableCollection()))
        res = TestClient(app).post("/api/login", json={"username": "alice", "password": "s3cret"})
        assert res.status_code == 500
        assert res.headers["content-type"].startswith("application/json")
        assert res.json() == INTERNAL_ERROR

    def test_register_with_store_down_is_json_500(self):
        app = create_app(Settings(BCRYPT_ROUNDS=4), users=MongoUserDirectory(UnreachableCollection()))
        res = register(TestClient(app))
        assert res.status_code == 500
        assert res.json() == INTERNAL_ERROR

    def test_startup_survives_store_down(self):
        app = create_app(Settings(BCRYPT_ROUNDS=4), users=MongoUserDirectory(UnreachableCollection()))
        with TestClient(app) as client:
            assert client.get("/api/health").status_code == 200

    def test_failed_score_write_is_json_500(self):
        collection = ScoreWriteFailsCollection(mongomock.MongoClient().quizapp.users)
        client = TestClient(create_app(Settings(BCRYPT_ROUNDS=4), users=MongoUserDirectory(collection)))
        register(client)
        res = client.post("/api/quiz/submit", json={"answers": ALL_CORRECT})
        assert res.status_code == 500
        assert res.json() == INTERNAL_ERROR
