"""
Tests for raw answer normalization and profile loading.

Covers:
- Nested, dotted and plain-column records
- Field aliases and ";"-separated label strings
- Missing values (None, NaN, blanks) treated as unanswered
- Partial personality vectors rejected
- JSON and CSV exports, duplicate ids, missing files
"""

import json

import numpy as np
import pandas as pd
import pytest

from matchcore.data_loading import (
    load_profile_frame,
    load_profiles,
    profiles_from_frame,
    validate_profile_columns,
)
from matchcore.exceptions import InvalidInput
from matchcore.inference import CompatibilityScorer
from matchcore.preprocessing import AnswerNormalizer, split_labels
from matchcore.schema import KidsIntent, SubstanceUse, PoliticalLeaning

TRAIT_COLUMNS = "openness,conscientiousness,extraversion,agreeableness,neuroticism"


class TestSplitLabels:

    def test_string_split_and_trimmed(self):
        assert split_labels("Hiking; coffee ;;") == ["Hiking", "coffee"]

    def test_list_with_missing_entries(self):
        assert split_labels(["jazz", None, " ", np.nan]) == ["jazz"]

    @pytest.mark.parametrize("missing", [None, np.nan, "", "   "])
    def test_missing(self, missing):
        assert split_labels(missing) == []

    def test_rejects_other_types(self):
        with pytest.raises(InvalidInput):
            split_labels(12)


class TestAnswerNormalizer:

    def test_flattened_record_with_aliases(self):
        record = {
            "userId": "u1",
            "personality.openness": np.int64(10),
            "personality.conscientiousness": 20.0,
            "personality.extraversion": "30",
            "personality.agreeableness": 40,
            "personality.neuroticism": 50,
            "interests": "Hiking;coffee",
            "values": np.nan,
            "lifestyle.wantsKids": "yes",
            "lifestyle.marijuana": "sometimes",
            "lifestyle.politics": "Not Political",
            "lifestyle.religion": None,
            "gender": " woman ",
            "looking_for": "man;woman",
        }
        profile = AnswerNormalizer().normalize(record)

        assert profile.user_id == "u1"
        assert profile.personality.to_dict() == {
            "openness": 10, "conscientiousness": 20.0, "extraversion": 30.0,
            "agreeableness": 40, "neuroticism": 50,
        }
        assert profile.interests == ["Hiking", "coffee"]
        assert profile.values == []
        assert profile.lifestyle.wants_kids is KidsIntent.WANT
        assert profile.lifestyle.cannabis_use is SubstanceUse.RARELY
        assert profile.lifestyle.politics is PoliticalLeaning.APOLITICAL
        assert profile.lifestyle.religion == []
        assert profile.gender == "woman"
        assert profile.looking_for == ["man", "woman"]

    def test_nested_record(self):
        record = {
            "user_id": "u2",
            "personality": {"openness": 1, "conscientiousness": 2, "extraversion": 3,
                            "agreeableness": 4, "neuroticism": 5},
            "lifestyle": {"drinking": "Socially", "religion": ["Buddhist"]},
        }
        profile = AnswerNormalizer().normalize(record)
        assert profile.personality.neuroticism == 5
        assert profile.lifestyle.drinking is SubstanceUse.SOCIALLY
        assert profile.lifestyle.religion == ["Buddhist"]

    def test_no_traits_means_no_personality(self):
        record = {"user_id": "u3", "openness": np.nan, "personality": None}
        assert AnswerNormalizer().normalize(record).personality is None

    def test_partial_traits_rejected(self):
        record = {"user_id": "u4", "openness": 50, "extraversion": 20}
        with pytest.raises(InvalidInput, match="u4.*missing traits"):
            AnswerNormalizer().normalize(record)

    def test_out_of_range_trait_rejected(self):
        record = {"user_id": "u5", **{t: 50 for t in TRAIT_COLUMNS.split(",")}, "openness": 120}
        with pytest.raises(InvalidInput, match="openness"):
            AnswerNormalizer().normalize(record)

    def test_missing_user_id(self):
        with pytest.raises(InvalidInput, match="no user id"):
            AnswerNormalizer().normalize({"interests": "art"})

    def test_custom_separator(self):
        profile = AnswerNormalizer(separator="|").normalize({"user_id": "u6", "interests": "art|film"})
        assert profile.interests == ["art", "film"]


class TestLoaders:

    def test_sample_json(self, sample_profiles_path):
        profiles = load_profiles(sample_profiles_path)
        by_id = {p.user_id: p for p in profiles}

        assert len(profiles) == 8
        assert by_id["harper"].personality is None
        assert by_id["blake"].lifestyle.wants_kids is KidsIntent.WANT
        assert by_id["finley"].lifestyle.cannabis_use is SubstanceUse.REGULARLY
        assert by_id["finley"].lifestyle.religion == []
        assert by_id["gray"].gender is None

    def test_sample_json_reference_pair(self, sample_profiles_path):
        by_id = {p.user_id: p for p in load_profiles(sample_profiles_path)}
        result = CompatibilityScorer().score(by_id["alex"], by_id["blake"])
        assert result.overall_score == 81

    def test_csv(self, tmp_path):
        path = tmp_path / "profiles.csv"
        path.write_text(
            f"user_id,{TRAIT_COLUMNS},interests,values,wants_kids,drinking,politics\n"
            "a,50,50,50,50,50,coffee;hiking,honesty,want,socially,moderate\n"
            "b,,,,,,coffee,,maybe,,\n"
        )
        profiles = load_profiles(str(path))
        assert profiles[0].interests == ["coffee", "hiking"]
        assert profiles[0].lifestyle.politics is PoliticalLeaning.MODERATE
        assert profiles[1].personality is None
        assert profiles[1].values == []
        assert profiles[1].lifestyle.drinking is None

    def test_json_wrapped_in_object(self, tmp_path):
        path = tmp_path / "export.json"
        path.write_text(json.dumps({"profiles": [{"user_id": "x"}, {"user_id": "y"}]}))
        assert [p.user_id for p in load_profiles(str(path))] == ["x", "y"]

    def test_prefer_not_to_say_substance_answers(self, tmp_path):
        path = tmp_path / "export.json"
        path.write_text(json.dumps([
            {"user_id": "a", "lifestyle": {"drinking": "prefer_not_to_say", "smoking": "never"}},
            {"user_id": "b", "lifestyle": {"smoking": "prefer_not_to_say",
                                           "cannabis_use": "prefer_not_to_say"}},
        ]))
        a, b = load_profiles(str(path))
        assert a.lifestyle.drinking is SubstanceUse.RARELY
        assert a.lifestyle.smoking is SubstanceUse.NEVER
        assert b.lifestyle.smoking is SubstanceUse.RARELY
        assert b.lifestyle.cannabis_use is SubstanceUse.RARELY

    def test_duplicate_ids_rejected(self, tmp_path):
        path = tmp_path / "dupes.json"
        path.write_text(json.dumps([{"user_id": "x"}, {"user_id": "x"}]))
        with pytest.raises(InvalidInput, match="Duplicate"):
            load_profiles(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_profile_frame(str(tmp_path / "nope.json"))

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("[]")
        with pytest.raises(ValueError, match="empty"):
            load_profile_frame(str(path))

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "profiles.xml"
        path.write_text("<profiles/>")
        with pytest.raises(ValueError, match="Unsupported"):
            load_profile_frame(str(path))

    def test_validate_profile_columns(self):
        assert validate_profile_columns(pd.DataFrame({"user_id": ["a"]})) == []
        assert validate_profile_columns(pd.DataFrame({"name": ["a"]})) != []
        with pytest.raises(ValueError, match="missing required columns"):
            profiles_from_frame(pd.DataFrame({"name": ["a"]}))
