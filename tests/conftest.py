"""Shared pytest configuration for ipldtree tests."""

import pytest

from ipldtree import Node

# A valid base58 sha2-256 multihash
QM_HASH = "QmZku7P7KeeHAnwMr6c4HveYfMzmtVinNXzibkiNbfDbPo"


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: long-running tests excluded by run_tests.py")


@pytest.fixture
def unixfs_doc():
    """A small filesystem-like document with links at several depths."""
    return Node({
        "foo": {
            "unixType": "dir",
            "unixMode": "0777",
            "link": {"/": QM_HASH},
        },
        "bar": {
            "unixType": "file",
            "unixMode": "0755",
            "link": {"/": QM_HASH[:-1] + "b"},
        },
        "name": "root",
        "sizes": [1, 2, 3],
    })
