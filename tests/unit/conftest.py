from unittest.mock import MagicMock

import pytest

from rental_escrow.shared.domain import Address


@pytest.fixture
def owner():
    """出品者アドレスのフィクスチャ"""
    return Address("0xOwner")


@pytest.fixture
def renter():
    """借り手アドレスのフィクスチャ"""
    return Address("0xRenter")


@pytest.fixture
def stranger():
    return Address("0xStranger")


@pytest.fixture
def mock_repository():
    """リポジトリのモックフィクスチャ"""
    return MagicMock()
