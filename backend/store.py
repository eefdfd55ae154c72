# JSON document store - whole document in memory, whole document rewritten on every mutation
from __future__ import annotations

import copy
import json
import logging
import os
import threading
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, TypeVar

from models import (
    fire_station_from_dict,
    medical_record_from_dict,
    person_from_dict,
    to_dict,
)

LOGGER = logging.getLogger("safetynet.store")

PERSONS = "persons"
FIRESTATIONS = "firestations"
MEDICALRECORDS = "medicalrecords"

# collection name -> factory building an entity from its JSON object
COLLECTIONS = {
    PERSONS: person_from_dict,
    FIRESTATIONS: fire_station_from_dict,
    MEDICALRECORDS: medical_record_from_dict,
}

T = TypeVar("T")


def read_document(path: Path) -> Optional[Dict]:
    """Read the backing document. None when missing, empty or unparseable."""
    if not path.exists() or path.stat().st_size == 0:
        return None
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        LOGGER.warning("Could not read data file %s: %s", path, exc)
        return None
    if not isinstance(data, dict):
        LOGGER.warning("Data file %s does not hold a JSON object", path)
        return None
    return data


class DataStore:
    """
    In-memory copy of the backing document.

    Reads return deep-copied snapshots and take no lock. Writes to a collection
    are serialized by that collection's lock, and every file rewrite by the
    file lock. The file is rewritten before the new list becomes visible, so a
    failed write leaves memory unchanged.
    """

    def __init__(self, path, document: Optional[Dict] = None):
        self.path = Path(path)
        self._collections: Dict[str, list] = {name: [] for name in COLLECTIONS}
        self._versions: Dict[str, int] = {name: 0 for name in COLLECTIONS}
        self._locks = {name: threading.Lock() for name in COLLECTIONS}
        self._file_lock = threading.Lock()
        if document is not None:
            self._load_document(document)

    @classmethod
    def open(cls, path, fallback: Optional[Dict] = None) -> "DataStore":
        """
        Load the document at `path`. If it is missing or unreadable, load
        `fallback` instead and write it to `path` straight away.
        """
        path = Path(path)
        document = read_document(path)
        if document is None:
            if fallback is None:
                raise FileNotFoundError(f"No usable data file at {path}")
            LOGGER.warning("Initialising %s from the baseline dataset", path)
            store = cls(path, fallback)
            store.flush()
        else:
            store = cls(path, document)
        LOGGER.info(
            "Loaded %d persons, %d fire stations, %d medical records from %s",
            len(store._collections[PERSONS]),
            len(store._collections[FIRESTATIONS]),
            len(store._collections[MEDICALRECORDS]),
            path,
        )
        return store

    def _load_document(self, document: Dict) -> None:
        for name, factory in COLLECTIONS.items():
            raw = document.get(name) or []
            self._collections[name] = [factory(item) for item in raw if isinstance(item, dict)]

    # -------------------------- reads --------------------------
    def snapshot(self, name: str) -> list:
        """Copy of the collection; callers may mutate it freely."""
        return copy.deepcopy(self._collections[name])

    def version(self, name: str) -> int:
        return self._versions[name]

    # -------------------------- writes --------------------------
    def compare_and_swap(self, name: str, expected_version: int, items: list) -> bool:
        """Replace the collection only if nobody wrote it since `expected_version`."""
        with self._locks[name]:
            if self._versions[name] != expected_version:
                return False
            self._commit(name, items)
            return True

    def update(self, name: str, mutate: Callable[[list], Tuple[Optional[list], T]]) -> T:
        """
        Atomic read-modify-write of one collection.

        `mutate` receives a snapshot and returns (new_items, result). When
        new_items is None nothing is written.
        """
        with self._locks[name]:
            items, result = mutate(copy.deepcopy(self._collections[name]))
            if items is not None:
                self._commit(name, items)
            return result

    def replace(self, name: str, items: list) -> None:
        with self._locks[name]:
            self._commit(name, items)

    def _commit(self, name: str, items: list) -> None:
        items = copy.deepcopy(list(items))
        # compose, write and assign under one lock
        with self._file_lock:
            self._write({**self._collections, name: items})
            self._collections[name] = items
            self._versions[name] += 1
        LOGGER.debug("Rewrote %s (%d entries)", name, len(items), extra={"collection": name})

    def flush(self) -> None:
        with self._file_lock:
            self._write(self._collections)

    def _write(self, collections: Dict[str, list]) -> None:
        """Rewrite the whole document. Caller holds _file_lock."""
        document = {name: [to_dict(entity) for entity in collections[name]] for name in COLLECTIONS}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp_path.write_text(json.dumps(document, ensure_ascii=False, indent=2), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError:
            LOGGER.exception("Failed to write data file %s", self.path)
            raise


# Process-wide store, bound at startup (and by tests)
_store: Optional[DataStore] = None


def get_store() -> DataStore:
    if _store is None:
        raise RuntimeError("Data store not initialised; call set_store() first")
    return _store


def set_store(store: DataStore) -> None:
    global _store
    _store = store
