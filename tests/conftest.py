from unittest.mock import MagicMock

import pytest

from fleet.config import FleetConfig
from fleet.dispatcher import Dispatcher
from fleet.tools import build_registry


class FakeClients:
    """Client factory handing out one MagicMock per AWS service."""

    def __init__(self):
        self.clients = {}
        self.created = []

    def __call__(self, service_name, region_name=None):
        self.created.append((service_name, region_name))
        return self.clients.setdefault(service_name, MagicMock(name=service_name))

    def __getitem__(self, service_name):
        return self.clients[service_name]


@pytest.fixture
def config():
    return FleetConfig(region="us-east-1", services="", log_level="INFO")


@pytest.fixture
def clients():
    return FakeClients()


@pytest.fixture
def registry(config, clients):
    return build_registry(config, client_factory=clients)


@pytest.fixture
def dispatcher(registry):
    return Dispatcher(registry)
