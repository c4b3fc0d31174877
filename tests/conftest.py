"""
ClubHub - Test Configuration and Fixtures
"""
import os
import tempfile
from datetime import timedelta
from typing import AsyncGenerator

import pytest
from httpx import AsyncClient, ASGITransport
from faker import Faker

# Set testing environment before the app reads its settings
_tmp_dir = tempfile.mkdtemp(prefix="clubhub-tests-")
os.environ['APP_ENV'] = 'testing'
os.environ['DATABASE_URL'] = f'sqlite:///{_tmp_dir}/test.db'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['LOG_LEVEL'] = 'WARNING'
os.environ['DEBUG'] = 'false'

import clubhub.models  # noqa: E402,F401
from clubhub.main import app  # noqa: E402
from clubhub.auth import create_user_token  # noqa: E402
from clubhub.clock import utcnow  # noqa: E402
from clubhub.database import database, engine, metadata  # noqa: E402
from clubhub.schemas.common import ClubName, UserRole  # noqa: E402
from clubhub.schemas.event import CreateEventRequest  # noqa: E402
from clubhub.schemas.recruitment import CreateRecruitmentRequest  # noqa: E402
from clubhub.schemas.user import RegisterRequest  # noqa: E402
from clubhub.services.event_service import event_service  # noqa: E402
from clubhub.services.recruitment_service import recruitment_service  # noqa: E402
from clubhub.services.user_service import user_service  # noqa: E402

fake = Faker()


@pytest.fixture(scope='function')
async def db():
    """Fresh schema for each test"""
    metadata.drop_all(engine)
    metadata.create_all(engine)

    await database.connect()
    yield database
    await database.disconnect()


@pytest.fixture
async def client(db) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac


def auth_headers(user: dict) -> dict:
    return {'Authorization': f'Bearer {create_user_token(user)}'}


@pytest.fixture
def make_student(db):
    """Factory: register a student and return the public user dict"""
    async def _make(**overrides) -> dict:
        data = {
            'name': fake.name(),
            'email': fake.unique.email(),
            'password': 'testpassword123',
            'role': UserRole.STUDENT,
            'roll_number': fake.unique.bothify('21CS####'),
            'department': 'Computer Science',
        }
        data.update(overrides)
        result = await user_service.register(RegisterRequest(**data))
        user = result['user']
        user['id'] = str(user['id'])
        return user
    return _make


@pytest.fixture
def make_admin(db):
    """Factory: register a club admin (CSI by default)"""
    async def _make(club_name: ClubName = ClubName.CSI, **overrides) -> dict:
        data = {
            'name': fake.name(),
            'email': fake.unique.email(),
            'password': 'adminpassword123',
            'role': UserRole.CLUB_ADMIN,
            'club_name': club_name,
        }
        data.update(overrides)
        result = await user_service.register(RegisterRequest(**data))
        user = result['user']
        user['id'] = str(user['id'])
        return user
    return _make


@pytest.fixture
async def student(make_student) -> dict:
    return await make_student()


@pytest.fixture
async def admin(make_admin) -> dict:
    return await make_admin()


@pytest.fixture
def make_event(db):
    """
    Factory: create an event through the service, then apply raw overrides

    Overrides go straight to the row so tests can put dates in the past.
    """
    async def _make(owner: dict, **overrides) -> dict:
        request = CreateEventRequest(
            title=fake.sentence(nb_words=3),
            description=fake.paragraph(),
            event_date=utcnow() + timedelta(days=7),
            event_time='10:00 AM',
            venue='Main Auditorium',
            max_participants=overrides.pop('max_participants', None),
            registration_deadline=overrides.pop('registration_deadline', None),
        )
        event = await event_service.create_event(owner, request)
        if overrides:
            assignments = ', '.join(f'{key} = :{key}' for key in overrides)
            await database.execute(
                f'UPDATE events SET {assignments} WHERE id = :id',
                {'id': str(event['id']), **overrides}
            )
            event = await event_service.get_event(event['id'], active_only=False)
        return event
    return _make


@pytest.fixture
def make_recruitment(db):
    """Factory: create a recruitment, with raw overrides as for events"""
    async def _make(owner: dict, questions=None, positions=None, **overrides) -> dict:
        request = CreateRecruitmentRequest(
            title='Core Team Recruitment',
            description=fake.paragraph(),
            positions=positions or [
                {'role': 'Developer', 'count': 2, 'requirements': 'Python'},
                {'role': 'Designer', 'count': 1, 'requirements': 'Figma'},
            ],
            questions=questions or [],
        )
        recruitment = await recruitment_service.create_recruitment(owner, request)
        if overrides:
            assignments = ', '.join(f'{key} = :{key}' for key in overrides)
            await database.execute(
                f'UPDATE recruitments SET {assignments} WHERE id = :id',
                {'id': str(recruitment['id']), **overrides}
            )
            recruitment = await recruitment_service.get_recruitment(recruitment['id'], active_only=False)
        return recruitment
    return _make
