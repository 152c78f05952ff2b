import pytest
from httpx import ASGITransport, AsyncClient

from idcards.errors import ApiError
from idcards.main import create_app
from idcards.schemas import CollegeInfo, StudentRecord

PHOTO = b"\x89PNG\r\n\x1a\nfake-photo-bytes"

REGISTRATION = {
    "name": "A",
    "email": "a@x.com",
    "phone": "123",
    "rollNumber": "R1",
    "department": "CS",
    "address": "Addr",
    "bloodGroup": "O+",
    "validity": "2022-2025",
}


def photo_upload(name="photo.png", content=PHOTO):
    return {"image": (name, content, "image/png")}


class FakeApi:
    """Stands in for IdCardApiClient and records every call."""

    def __init__(self):
        self.calls = []
        self.fail = {}
        self.token = "tok-123"
        self.college = CollegeInfo(name="Test College", address="1 Campus Road", logo="logo.png")
        self.students = [
            StudentRecord.model_validate({
                "_id": "s1", "name": "Asha Rao", "email": "asha@x.com", "phone": "555",
                "rollNumber": "R1", "department": "CS", "address": "Addr",
                "bloodGroup": "B+", "validity": "2022-2025", "image": "asha.png",
            }),
            StudentRecord.model_validate({
                "_id": "s2", "name": "Ben Ode", "email": "ben@x.com", "phone": "556",
                "rollNumber": "R2", "department": "EE", "address": "Addr 2",
                "bloodGroup": "O-", "validity": "2023-2026", "image": "ben.png",
                "idCardImage": "ben-card.jpg",
            }),
        ]

    def _record(self, name, *args):
        self.calls.append((name, args))
        if name in self.fail:
            raise self.fail[name]

    def count(self, name):
        return sum(1 for call, _ in self.calls if call == name)

    def args(self, name):
        return [args for call, args in self.calls if call == name]

    def reset_calls(self):
        self.calls = []

    async def list_students(self, token):
        self._record("list_students", token)
        return list(self.students)

    async def create_student(self, fields, image):
        self._record("create_student", dict(fields), image)

    async def upload_id_card(self, token, student_id, file):
        self._record("upload_id_card", token, student_id, file)

    async def delete_student(self, token, student_id):
        self._record("delete_student", token, student_id)
        self.students = [s for s in self.students if s.id != student_id]

    async def get_college_info(self):
        self._record("get_college_info")
        return self.college

    async def update_college_info(self, token, name, address, logo=None):
        self._record("update_college_info", token, name, address, logo)
        self.college = CollegeInfo(name=name, address=address, logo=self.college.logo)

    async def login(self, credentials):
        self._record("login", credentials.username, credentials.password)
        if credentials.password != "secret":
            raise ApiError("Invalid credentials", 401)
        return self.token

    async def aclose(self):
        pass


@pytest.fixture(name="api")
def api_fixture():
    return FakeApi()


@pytest.fixture(name="app")
def app_fixture(api):
    return create_app(api=api)


@pytest.fixture(name="client")
def client_fixture(app):
    client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    yield client


@pytest.fixture(name="visitor")
def visitor_fixture(app):
    """The ClientState of the single visitor a test drives."""
    def _visitor():
        states = list(app.state.clients)
        assert len(states) == 1
        return states[0]
    return _visitor


async def login(client, password="secret"):
    return await client.post(
        "/admin/login",
        data={"username": "admin", "password": password},
        follow_redirects=False,
    )
