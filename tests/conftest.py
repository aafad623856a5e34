import os
import sys

import pytest
from flask_login import FlaskLoginClient

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from goalquest_app import create_app, db
from goalquest_app.config import Config
from goalquest_app.models import User


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'connect_args': {'check_same_thread': False}
    }
    WTF_CSRF_ENABLED = False


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def user(app):
    user = User(username='quester', email='quester@example.com')
    user.set_password('password123')
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def user_client(app, user):
    app.test_client_class = FlaskLoginClient
    return app.test_client(user=user)
