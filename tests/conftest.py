"""Shared fixtures: commit graphs written to a plain-file store."""

from __future__ import annotations

from pathlib import Path

import pytest

from revlint.data import ObjectStore
from tests._support import message


@pytest.fixture
def store(tmp_path: Path) -> ObjectStore:
    store_ = ObjectStore(tmp_path)
    store_.init()
    return store_


@pytest.fixture
def history(store: ObjectStore) -> dict[str, str]:
    """Build the following graph, ``master`` checked out::

        c1 - c2 - c3 ----- m - c6     master
               \\         /
                f4 ---- f5            feature

    ``m`` is ``Merge branch 'feature'`` with ``c3`` as first parent.
    """
    oids: dict[str, str] = {}
    oids["c1"] = store.commit(message(1))
    oids["c2"] = store.commit(message(2))
    oids["c3"] = store.commit(message(3))
    oids["f4"] = store.write_commit(message(4), [oids["c2"]])
    oids["f5"] = store.write_commit(message(5), [oids["f4"]])
    store.create_branch("feature", oids["f5"])
    oids["m"] = store.commit("Merge branch 'feature'\n", [oids["c3"], oids["f5"]])
    oids["c6"] = store.commit(message(6))
    store.create_tag("v1", oids["c3"])
    return oids
