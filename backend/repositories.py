# Entity repositories over the shared DataStore
#
# Identity keys ((firstName, lastName) and fire-station address) are always
# compared trimmed and case-insensitively. Other filters document their own rule.
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Union

from errors import AlreadyExistsError, InvalidInputError
from models import FireStation, MedicalRecord, Person, is_blank, normalize_key
from store import FIRESTATIONS, MEDICALRECORDS, PERSONS, DataStore

LOGGER = logging.getLogger("safetynet.repositories")


def _same_name(entity, first_name: str, last_name: str) -> bool:
    """first_name/last_name must already be normalized"""
    return (
        normalize_key(entity.firstName) == first_name
        and normalize_key(entity.lastName) == last_name
    )


class PersonRepository:
    def __init__(self, store: DataStore):
        self._store = store

    def find_all(self) -> List[Person]:
        return self._store.snapshot(PERSONS)

    def find_by_address(self, address: Optional[str]) -> List[Person]:
        """Exact, case-sensitive address match."""
        if address is None:
            return []
        return [p for p in self._store.snapshot(PERSONS) if p.address == address]

    def find_by_address_in(self, addresses: Optional[Iterable[str]]) -> List[Person]:
        """Case-insensitive match against any of `addresses`."""
        wanted = {normalize_key(a) for a in (addresses or []) if a is not None}
        if not wanted:
            return []
        return [
            p for p in self._store.snapshot(PERSONS)
            if p.address and normalize_key(p.address) in wanted
        ]

    def find_by_last_name(self, last_name: Optional[str]) -> List[Person]:
        if last_name is None:
            return []
        key = normalize_key(last_name)
        return [p for p in self._store.snapshot(PERSONS) if normalize_key(p.lastName) == key]

    def find_by_city(self, city: Optional[str]) -> List[Person]:
        if city is None:
            return []
        key = normalize_key(city)
        return [p for p in self._store.snapshot(PERSONS) if p.city and normalize_key(p.city) == key]

    def find_by_first_name_and_last_name(
        self, first_name: Optional[str], last_name: Optional[str]
    ) -> Optional[Person]:
        if first_name is None or last_name is None:
            return None
        first, last = normalize_key(first_name), normalize_key(last_name)
        return next((p for p in self._store.snapshot(PERSONS) if _same_name(p, first, last)), None)

    def exists_by_id(self, first_name: Optional[str], last_name: Optional[str]) -> bool:
        if is_blank(first_name) or is_blank(last_name):
            return False
        return self.find_by_first_name_and_last_name(first_name, last_name) is not None

    def save(self, person: Person, insert_only: bool = False) -> Person:
        """
        Insert or replace by identity key; identity fields are stored trimmed.
        With insert_only an existing match raises AlreadyExistsError instead.
        """
        if person is None or is_blank(person.firstName) or is_blank(person.lastName):
            raise InvalidInputError("firstName and lastName are required to save a person")
        to_save = replace(person, firstName=person.firstName.strip(), lastName=person.lastName.strip())
        first, last = normalize_key(to_save.firstName), normalize_key(to_save.lastName)

        def mutate(persons):
            kept = [p for p in persons if not _same_name(p, first, last)]
            if insert_only and len(kept) != len(persons):
                raise AlreadyExistsError(f"Person {to_save.firstName} {to_save.lastName} already exists")
            if len(kept) != len(persons):
                LOGGER.debug("Replacing person %s %s", to_save.firstName, to_save.lastName)
            kept.append(to_save)
            return kept, replace(to_save)

        return self._store.update(PERSONS, mutate)

    def delete_by_first_name_and_last_name(
        self, first_name: Optional[str], last_name: Optional[str]
    ) -> bool:
        if is_blank(first_name) or is_blank(last_name):
            return False
        first, last = normalize_key(first_name), normalize_key(last_name)

        def mutate(persons):
            kept = [p for p in persons if not _same_name(p, first, last)]
            if len(kept) == len(persons):
                return None, False
            return kept, True

        return self._store.update(PERSONS, mutate)


class MedicalRecordRepository:
    def __init__(self, store: DataStore):
        self._store = store

    def find_all(self) -> List[MedicalRecord]:
        return self._store.snapshot(MEDICALRECORDS)

    def find_by_first_name_and_last_name(
        self, first_name: Optional[str], last_name: Optional[str]
    ) -> Optional[MedicalRecord]:
        if first_name is None or last_name is None:
            return None
        first, last = normalize_key(first_name), normalize_key(last_name)
        return next(
            (r for r in self._store.snapshot(MEDICALRECORDS) if _same_name(r, first, last)), None
        )

    def exists_by_first_name_and_last_name(
        self, first_name: Optional[str], last_name: Optional[str]
    ) -> bool:
        if is_blank(first_name) or is_blank(last_name):
            return False
        return self.find_by_first_name_and_last_name(first_name, last_name) is not None

    def save(self, record: MedicalRecord, insert_only: bool = False) -> MedicalRecord:
        """
        Insert or replace by identity key. Names are trimmed and missing
        medication/allergy lists become empty lists. With insert_only an
        existing match raises AlreadyExistsError instead.
        """
        if record is None or is_blank(record.firstName) or is_blank(record.lastName):
            raise InvalidInputError("firstName and lastName are required to save a medical record")
        to_save = MedicalRecord(
            firstName=record.firstName.strip(),
            lastName=record.lastName.strip(),
            birthdate=record.birthdate,
            medications=list(record.medications or []),
            allergies=list(record.allergies or []),
        )
        first, last = normalize_key(to_save.firstName), normalize_key(to_save.lastName)

        def mutate(records):
            kept = [r for r in records if not _same_name(r, first, last)]
            if insert_only and len(kept) != len(records):
                raise AlreadyExistsError(
                    f"A medical record already exists for {to_save.firstName} {to_save.lastName}"
                )
            kept.append(to_save)
            return kept, replace(to_save, medications=list(to_save.medications),
                                 allergies=list(to_save.allergies))

        return self._store.update(MEDICALRECORDS, mutate)

    def delete_by_first_name_and_last_name(
        self, first_name: Optional[str], last_name: Optional[str]
    ) -> bool:
        if is_blank(first_name) or is_blank(last_name):
            return False
        first, last = normalize_key(first_name), normalize_key(last_name)

        def mutate(records):
            kept = [r for r in records if not _same_name(r, first, last)]
            if len(kept) == len(records):
                return None, False
            return kept, True

        return self._store.update(MEDICALRECORDS, mutate)


class FireStationRepository:
    def __init__(self, store: DataStore):
        self._store = store

    def find_all(self) -> List[FireStation]:
        return self._store.snapshot(FIRESTATIONS)

    def find_addresses_by_station_number(self, station_number: Union[int, str]) -> List[str]:
        """Distinct addresses served by the station, in first-seen order."""
        wanted = str(station_number).strip()
        addresses: List[str] = []
        for fs in self._store.snapshot(FIRESTATIONS):
            if fs.station.strip() == wanted and fs.address not in addresses:
                addresses.append(fs.address)
        return addresses

    def find_station_number_by_address(self, address: Optional[str]) -> Optional[str]:
        if is_blank(address):
            return None
        key = normalize_key(address)
        return next(
            (fs.station for fs in self._store.snapshot(FIRESTATIONS) if normalize_key(fs.address) == key),
            None,
        )

    def exists_by_address(self, address: Optional[str]) -> bool:
        return self.find_station_number_by_address(address) is not None

    def save(self, fire_station: FireStation, insert_only: bool = False) -> FireStation:
        """Insert or replace the mapping for the (trimmed) address. insert_only refuses to replace."""
        if fire_station is None or is_blank(fire_station.address) or is_blank(fire_station.station):
            raise InvalidInputError("address and station are required to save a fire station")
        to_save = FireStation(address=fire_station.address.strip(), station=fire_station.station.strip())
        key = normalize_key(to_save.address)

        def mutate(stations):
            kept = [fs for fs in stations if normalize_key(fs.address) != key]
            if insert_only and len(kept) != len(stations):
                raise AlreadyExistsError(f"A mapping already exists for address {to_save.address}")
            kept.append(to_save)
            return kept, replace(to_save)

        return self._store.update(FIRESTATIONS, mutate)

    def delete_by_address(self, address: Optional[str]) -> bool:
        if is_blank(address):
            return False
        key = normalize_key(address)

        def mutate(stations):
            kept = [fs for fs in stations if normalize_key(fs.address) != key]
            if len(kept) == len(stations):
                return None, False
            return kept, True

        return self._store.update(FIRESTATIONS, mutate)
