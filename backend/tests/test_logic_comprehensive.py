"""
Comprehensive tests for logic.py - age rules and derived views

All views are computed against the baseline dataset with a fixed "today" so
ages do not drift.
"""
from datetime import date

import pytest

from logic import (
    calculate_age,
    children_at_address,
    community_emails,
    fire_report_for_address,
    flood_report,
    is_child,
    person_info_by_last_name,
    phone_alert,
    station_coverage,
)
from models import MedicalRecord, Person

TODAY = date(2026, 10, 16)


# =============================================================================
# TEST: calculate_age() / is_child()
# =============================================================================
class TestCalculateAge:
    """Tests for calculate_age function"""

    def test_birthday_already_passed_this_year(self):
        assert calculate_age("03/06/1984", TODAY) == 42

    def test_birthday_later_this_year(self):
        assert calculate_age("12/06/1975", TODAY) == 50

    def test_birthday_today(self):
        assert calculate_age("10/16/2008", TODAY) == 18

    def test_day_before_birthday(self):
        assert calculate_age("10/17/2008", TODAY) == 17

    def test_surrounding_whitespace_ignored(self):
        assert calculate_age("  09/06/2017 ", TODAY) == 9

    @pytest.mark.parametrize("birthdate", [None, "", "   "])
    def test_blank_birthdate_rejected(self, birthdate):
        with pytest.raises(ValueError):
            calculate_age(birthdate, TODAY)

    @pytest.mark.parametrize("birthdate", ["2017-09-06", "13/01/2000", "not a date"])
    def test_malformed_birthdate_rejected(self, birthdate):
        with pytest.raises(ValueError):
            calculate_age(birthdate, TODAY)

    def test_future_birthdate_rejected(self):
        with pytest.raises(ValueError):
            calculate_age("01/01/2030", TODAY)


class TestIsChild:
    """The threshold age itself still counts as a child"""

    def test_threshold_is_inclusive(self):
        assert is_child(18) is True
        assert is_child(19) is False

    def test_custom_threshold(self):
        assert is_child(12, threshold=12) is True
        assert is_child(13, threshold=12) is False


# =============================================================================
# TEST: station_coverage()
# =============================================================================
class TestStationCoverage:
    """Tests for station_coverage function"""

    def test_station_3_counts(self, persons, stations, records):
        result = station_coverage(3, persons, stations, records, today=TODAY)
        assert len(result["people"]) == 11
        assert result["adultCount"] == 8
        assert result["childCount"] == 3

    def test_people_carry_contact_fields_only(self, persons, stations, records):
        result = station_coverage(2, persons, stations, records, today=TODAY)
        assert result["people"][0] == {
            "firstName": "Jonanathan",
            "lastName": "Marrack",
            "address": "29 15th St",
            "phone": "841-874-6513",
        }

    def test_unknown_station_is_absent(self, persons, stations, records):
        assert station_coverage(99, persons, stations, records, today=TODAY) is None

    def test_person_without_record_is_listed_but_not_counted(self, persons, stations, records):
        persons.save(Person(firstName="Nora", lastName="Nobody", address="29 15th St"))
        result = station_coverage(2, persons, stations, records, today=TODAY)
        assert len(result["people"]) == 3
        assert result["adultCount"] + result["childCount"] == 2

    def test_threshold_is_configurable(self, persons, stations, records):
        result = station_coverage(1, persons, stations, records, threshold=5, today=TODAY)
        assert result["childCount"] == 0
        assert result["adultCount"] == 4


# =============================================================================
# TEST: children_at_address()
# =============================================================================
class TestChildrenAtAddress:
    """Tests for children_at_address function"""

    def test_children_and_family_members(self, persons, records):
        result = children_at_address("1509 Culver St", persons, records, today=TODAY)
        assert result["children"] == [
            {"firstName": "Tenley", "lastName": "Boyd", "age": 14},
            {"firstName": "Roger", "lastName": "Boyd", "age": 9},
        ]
        assert [m["firstName"] for m in result["familyMembers"]] == ["John", "Jacob", "Felicia"]

    def test_address_lookup_ignores_case(self, persons, records):
        result = children_at_address("1509 culver st", persons, records, today=TODAY)
        assert len(result["children"]) == 2

    def test_address_without_children_is_absent(self, persons, records):
        assert children_at_address("951 LoneTree Rd", persons, records, today=TODAY) is None

    def test_unknown_address_is_absent(self, persons, records):
        assert children_at_address("1 Nowhere Ln", persons, records, today=TODAY) is None

    def test_bad_birthdate_skips_the_person(self, persons, records):
        records.save(MedicalRecord(firstName="Roger", lastName="Boyd", birthdate="garbage"))
        result = children_at_address("1509 Culver St", persons, records, today=TODAY)
        assert [c["firstName"] for c in result["children"]] == ["Tenley"]


# =============================================================================
# TEST: phone_alert()
# =============================================================================
class TestPhoneAlert:
    """Tests for phone_alert function"""

    def test_phones_for_station_keep_duplicates(self, persons, stations):
        result = phone_alert(1, persons, stations)
        assert result["phones"] == ["841-874-6512", "841-874-7784", "841-874-7784", "841-874-7784"]

    def test_unknown_station_is_absent(self, persons, stations):
        assert phone_alert(42, persons, stations) is None


# =============================================================================
# TEST: fire_report_for_address()
# =============================================================================
class TestFireReport:
    """Tests for fire_report_for_address function"""

    def test_residents_with_station_and_medical_details(self, persons, stations, records):
        result = fire_report_for_address("947 E. Rose Dr", persons, stations, records, today=TODAY)
        assert len(result["persons"]) == 3
        brian = result["persons"][0]
        assert brian == {
            "lastName": "Stelzer",
            "phone": "841-874-7784",
            "fireStation": "1",
            "age": 50,
            "medications": ["ibupurin:200mg", "hydrapermazol:400mg"],
            "allergies": ["nillacilan"],
        }

    def test_unmapped_address_has_no_station(self, persons, stations, records):
        stations.delete_by_address("951 LoneTree Rd")
        result = fire_report_for_address("951 LoneTree Rd", persons, stations, records, today=TODAY)
        assert result["persons"][0]["fireStation"] is None

    def test_resident_without_record_is_skipped(self, persons, stations, records):
        records.delete_by_first_name_and_last_name("Eric", "Cadigan")
        assert fire_report_for_address("951 LoneTree Rd", persons, stations, records, today=TODAY) is None

    def test_empty_address_is_absent(self, persons, stations, records):
        assert fire_report_for_address("892 Downing Ct", persons, stations, records, today=TODAY) is None


# =============================================================================
# TEST: flood_report()
# =============================================================================
class TestFloodReport:
    """Tests for flood_report function"""

    def test_households_grouped_per_station(self, persons, stations, records):
        result = flood_report(["1", "2"], persons, stations, records, today=TODAY)
        groups = result["fireStationAddressPersonMedicalRecords"]
        assert [g["fireStation"] for g in groups] == ["1", "2"]
        assert [h["address"] for h in groups[0]["persons"]] == ["644 Gershwin Cir", "947 E. Rose Dr"]
        assert [h["address"] for h in groups[1]["persons"]] == ["29 15th St", "951 LoneTree Rd"]
        assert len(groups[0]["persons"][1]["persons"]) == 3

    def test_invalid_and_unknown_stations_are_skipped(self, persons, stations, records):
        result = flood_report(["abc", "77", " 4 "], persons, stations, records, today=TODAY)
        groups = result["fireStationAddressPersonMedicalRecords"]
        assert len(groups) == 1
        assert groups[0]["fireStation"] == "4"

    def test_no_station_gives_empty_list(self, persons, stations, records):
        result = flood_report([], persons, stations, records, today=TODAY)
        assert result == {"fireStationAddressPersonMedicalRecords": []}


# =============================================================================
# TEST: person_info_by_last_name()
# =============================================================================
class TestPersonInfo:
    """Tests for person_info_by_last_name function"""

    def test_all_boyds_listed(self, persons, records):
        result = person_info_by_last_name("Boyd", persons, records, today=TODAY)
        assert result["lastName"] == "Boyd"
        assert len(result["personInfoList"]) == 6
        allison = result["personInfoList"][-1]
        assert allison == {
            "address": "112 Steppes Pl",
            "age": 61,
            "email": "aly@imail.com",
            "medications": ["aznol:200mg"],
            "allergies": ["nillacilan"],
        }

    def test_last_name_trimmed_and_case_insensitive(self, persons, records):
        result = person_info_by_last_name("  sTELZER ", persons, records, today=TODAY)
        assert result["lastName"] == "sTELZER"
        assert len(result["personInfoList"]) == 3

    def test_unknown_last_name_is_absent(self, persons, records):
        assert person_info_by_last_name("Nobody", persons, records, today=TODAY) is None


# =============================================================================
# TEST: community_emails()
# =============================================================================
class TestCommunityEmails:
    """Tests for community_emails function"""

    def test_distinct_emails_first_seen_order(self, persons):
        result = community_emails("Culver", persons)
        assert result["city"] == "Culver"
        assert len(result["emails"]) == 11
        assert len(set(result["emails"])) == 11
        assert result["emails"][:3] == ["jaboyd@email.com", "drk@email.com", "tenz@email.com"]

    def test_city_trimmed_and_case_insensitive(self, persons):
        result = community_emails(" culver ", persons)
        assert result["city"] == "culver"
        assert len(result["emails"]) == 11

    def test_unknown_city_is_absent(self, persons):
        assert community_emails("Springfield", persons) is None
