# tests/conftest.py

import json

import pytest

from core.config import DEFAULT_STORAGE_KEY, reset_config
from models.record_store import RecordStore
from models.student import StudentForm, StudentRecord
from storage.blob_store import InMemoryBlobStore

STORAGE_KEY = DEFAULT_STORAGE_KEY


@pytest.fixture
def sample_form():
    return StudentForm(
        name="A",
        reg_no="R1",
        dept="CS",
        age="20",
        gender="Male",
        marks="90",
        dob="2000-01-01",
    )


@pytest.fixture
def sample_record():
    return StudentRecord(
        id="s001",
        name="Grace Hopper",
        reg_no="REG0001",
        dept="Mathematics",
        age=21,
        gender="Female",
        marks=95,
        dob="2003-12-09",
    )


@pytest.fixture
def second_record():
    return StudentRecord(
        id="s002",
        name="Alan Turing",
        reg_no="REG0002",
        dept="Computer Science",
        age=23,
        gender="Male",
        marks=88.5,
        dob="2001-06-23",
    )


@pytest.fixture
def memory_blob_store():
    return InMemoryBlobStore()


@pytest.fixture
def seeded_blob_store(sample_record, second_record):
    payload = json.dumps([sample_record.to_dict(), second_record.to_dict()])
    return InMemoryBlobStore({STORAGE_KEY: payload})


@pytest.fixture
def record_store(seeded_blob_store):
    store = RecordStore(seeded_blob_store, STORAGE_KEY)
    store.load()
    return store


@pytest.fixture(autouse=True)
def clean_config():
    reset_config()
    yield
    reset_config()
