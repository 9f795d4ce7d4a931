"""Shared fixtures for the hosted translation tests."""

import pytest

from hosted_translation.core import NetworkEnvironment
from hosted_translation.io import InMemoryRemoteStore
from hosted_translation.services import (
    ActivityCounter,
    CacheStore,
    Database,
    HostedTranslationArchiver,
    InMemoryTranslationArchive,
    NetworkStatus,
    OperationExecutor,
)


@pytest.fixture
def status():
    return NetworkStatus()


@pytest.fixture
def activity():
    return ActivityCounter()


@pytest.fixture
def executor(status, activity):
    return OperationExecutor(status, activity, default_timeout=1.0)


@pytest.fixture
def store():
    return InMemoryRemoteStore()


@pytest.fixture
def database(store, executor):
    return Database(store, executor, CacheStore(), NetworkEnvironment.PRODUCTION)


@pytest.fixture
def local_archive():
    return InMemoryTranslationArchive()


@pytest.fixture
def archiver(database, local_archive):
    return HostedTranslationArchiver(database, local_archive)
