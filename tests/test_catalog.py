"""
Unit tests for the question catalog and the answer store.
"""

import pytest
from evaluators.answers import AnswerStore, parse_stored_value
from evaluators.catalog import QuestionCatalog, polarity_from_marker
from evaluators.errors import InvalidResponseValue, UnknownItem
from evaluators.scoring import compute_scores
from models.enums import Polarity, Subscale
from models.schemas import QuestionRecord


def record(category, question_id, type_of_question="+", scale_value=None, text=None, category_id="FGC_0002"):
    return QuestionRecord.model_validate({
        "FactGCategoryId": category_id,
        "FactGCategoryName": category,
        "FactGQuestionId": question_id,
        "FactGQuestion": text or f"Text of {question_id}",
        "TypeOfQuestion": type_of_question,
        "ScaleValue": scale_value,
    })


class TestQuestionRecord:
    """Tests for wire record parsing."""

    def test_generic_field_names_accepted(self):
        rec = QuestionRecord.model_validate({
            "CategoryName": "Physical well-being",
            "QuestionId": "GP1",
            "QuestionText": "I have a lack of energy",
            "TypeOfQuestion": "-",
            "ScaleValue": None,
        })
        assert rec.category_name == "Physical well-being"
        assert rec.question_id == "GP1"
        assert rec.category_id is None

    def test_numeric_values_stringified(self):
        rec = QuestionRecord.model_validate({
            "FactGCategoryName": "Physical well-being",
            "FactGQuestionId": 7,
            "ScaleValue": 3,
        })
        assert rec.question_id == "7"
        assert rec.scale_value == "3"


class TestPolarity:
    """Tests for TypeOfQuestion mapping."""

    def test_minus_is_reverse(self):
        assert polarity_from_marker("-") == Polarity.REVERSE

    def test_everything_else_is_direct(self):
        assert polarity_from_marker("+") == Polarity.DIRECT
        assert polarity_from_marker(None) == Polarity.DIRECT
        assert polarity_from_marker("") == Polarity.DIRECT


class TestQuestionCatalog:
    """Tests for QuestionCatalog.from_records."""

    def test_categories_follow_canonical_order(self):
        catalog = QuestionCatalog.from_records([
            record("Functional well-being", "GF1"),
            record("Emotional well-being", "GE1"),
            record("Social/Family well-being", "GS1"),
            record("Physical well-being", "GP1"),
        ])
        assert [c.subscale for c in catalog.categories] == [
            Subscale.PHYSICAL,
            Subscale.SOCIAL,
            Subscale.EMOTIONAL,
            Subscale.FUNCTIONAL,
        ]
        assert [c.short_code for c in catalog.categories] == ["P", "S", "E", "F"]

    def test_duplicates_keep_first_seen(self):
        catalog = QuestionCatalog.from_records([
            record("Physical well-being", "GP1", "-", text="first"),
            record("Physical well-being", "GP1", "+", text="second"),
        ])
        assert len(catalog) == 1
        item = catalog.get_item("GP1")
        assert item.text == "first"
        assert item.polarity == Polarity.REVERSE

    def test_items_sorted_lexically(self):
        """Ids are compared as strings: "GP10" sorts before "GP2"."""
        catalog = QuestionCatalog.from_records([
            record("Physical well-being", "GP2"),
            record("Physical well-being", "GP10"),
            record("Physical well-being", "GP1"),
        ])
        assert catalog.item_ids == ["GP1", "GP10", "GP2"]

    def test_unknown_category_dropped(self):
        catalog = QuestionCatalog.from_records([
            record("Physical well-being", "GP1"),
            record("Additional concerns", "B1"),
        ])
        assert catalog.item_ids == ["GP1"]
        assert "B1" not in catalog

    def test_empty_records_empty_catalog(self):
        catalog = QuestionCatalog.from_records([])
        assert catalog.is_empty
        assert catalog.categories == ()
        assert catalog.max_total == 0

    def test_get_unknown_item(self):
        catalog = QuestionCatalog.from_records([record("Physical well-being", "GP1")])
        with pytest.raises(UnknownItem):
            catalog.get_item("GX9")

    def test_max_scores(self):
        catalog = QuestionCatalog.from_records([
            record("Physical well-being", "GP1"),
            record("Physical well-being", "GP2"),
            record("Emotional well-being", "GE1"),
        ])
        assert catalog.category(Subscale.PHYSICAL).max_score == 8
        assert catalog.category(Subscale.SOCIAL) is None
        assert catalog.max_total == 12


class TestParseStoredValue:
    """Tests for the single unanswered-value normalization."""

    @pytest.mark.parametrize("raw,expected", [("0", 0), ("4", 4), (" 2 ", 2), (3, 3)])
    def test_valid_values(self, raw, expected):
        assert parse_stored_value(raw) == expected

    @pytest.mark.parametrize("raw", ["x", "X", None, "", "abc", "5", "-1", "2.5", 9, True, "0_3", "３", "٣", "+"])
    def test_unset_values(self, raw):
        assert parse_stored_value(raw) is None


class TestAnswerStore:
    """Tests for AnswerStore."""

    def make_catalog(self):
        return QuestionCatalog.from_records([
            record("Physical well-being", "GP1"),
            record("Physical well-being", "GP2"),
            record("Emotional well-being", "GE1"),
            record("Emotional well-being", "GE2", "-"),
        ])

    def test_starts_all_unset(self):
        answers = AnswerStore(self.make_catalog())
        assert answers.answered_count == 0
        assert answers.total_items == 4
        assert all(v is None for v in answers.snapshot().values())

    def test_hydrate_from_records(self):
        answers = AnswerStore(self.make_catalog())
        answers.hydrate([
            record("Physical well-being", "GP1", scale_value="3"),
            record("Physical well-being", "GP2", scale_value="x"),
            record("Emotional well-being", "GE1", scale_value="abc"),
            record("Emotional well-being", "ZZ9", scale_value="2"),
        ])
        assert answers.get("GP1") == 3
        assert answers.get("GP2") is None
        assert answers.get("GE1") is None
        assert answers.answered_count == 1

    def test_hydrate_keeps_unmentioned_edits(self):
        answers = AnswerStore(self.make_catalog())
        answers.set_answer("GE2", 1)
        answers.hydrate({"GP1": "4"})
        assert answers.get("GE2") == 1
        assert answers.get("GP1") == 4

    def test_sentinels_score_like_never_answered(self):
        """"x", None and "abc" all equal an unanswered item downstream."""
        catalog = self.make_catalog()
        baseline = AnswerStore(catalog)
        baseline.set_answer("GP1", 2)
        expected = compute_scores(catalog, baseline.snapshot())

        for raw in ("x", None, "abc"):
            answers = AnswerStore(catalog)
            answers.hydrate({"GP1": "2", "GP2": raw})
            assert answers.get("GP2") is None
            assert compute_scores(catalog, answers.snapshot()) == expected

    def test_set_answer_rejects_out_of_range(self):
        answers = AnswerStore(self.make_catalog())
        with pytest.raises(InvalidResponseValue):
            answers.set_answer("GP1", 5)
        with pytest.raises(InvalidResponseValue):
            answers.set_answer("GP1", -1)
        assert answers.get("GP1") is None

    def test_set_answer_rejects_unknown_item(self):
        answers = AnswerStore(self.make_catalog())
        with pytest.raises(UnknownItem):
            answers.set_answer("GX1", 2)

    def test_merge_edits(self):
        answers = AnswerStore(self.make_catalog())
        answers.set_answer("GE1", 4)
        answers.merge_edits({"GP1": 3, "GP2": "1", "GE1": None, "GE2": "x"})
        assert answers.snapshot() == {"GP1": 3, "GP2": 1, "GE1": None, "GE2": None}

    @pytest.mark.parametrize("value", ["7", "-1", "+5"])
    def test_merge_edits_rejects_out_of_range_strings(self, value):
        answers = AnswerStore(self.make_catalog())
        answers.set_answer("GP1", 2)
        with pytest.raises(InvalidResponseValue):
            answers.merge_edits({"GP1": value})
        assert answers.get("GP1") == 2

    def test_merge_edits_non_ascii_digits_unset(self):
        answers = AnswerStore(self.make_catalog())
        answers.merge_edits({"GP1": "３", "GP2": "+2"})
        assert answers.get("GP1") is None
        assert answers.get("GP2") == 2

    def test_clear_keeps_catalog_and_scores_zero(self):
        catalog = self.make_catalog()
        answers = AnswerStore(catalog)
        answers.merge_edits({"GP1": 4, "GE2": 0})
        answers.clear()

        assert answers.catalog is catalog
        assert answers.answered_count == 0
        result = compute_scores(catalog, answers.snapshot())
        assert result.PWB == result.EWB == result.TOTAL == 0

    def test_snapshot_is_read_only(self):
        answers = AnswerStore(self.make_catalog())
        snapshot = answers.snapshot()
        with pytest.raises(TypeError):
            snapshot["GP1"] = 2
        answers.set_answer("GP1", 2)
        assert snapshot["GP1"] is None

    def test_validate_for_save(self):
        answers = AnswerStore(self.make_catalog())
        assert answers.validate_for_save() == ["GP1", "GP2", "GE1", "GE2"]
        answers.set_answer("GE1", 0)
        assert answers.validate_for_save() == []

    def test_submission_items(self):
        catalog = QuestionCatalog.from_records([
            record("Physical well-being", "GP1", category_id="FGC_0001"),
            QuestionRecord.model_validate({
                "FactGCategoryName": "Physical well-being",
                "FactGQuestionId": "GP2",
            }),
        ])
        answers = AnswerStore(catalog)
        answers.set_answer("GP1", 0)

        rows = answers.to_submission_items("FGC_DEFAULT")

        assert [r.model_dump() for r in rows] == [
            {"FactGCategoryId": "FGC_0001", "FactGQuestionId": "GP1", "ScaleValue": "0", "FlagStatus": "Yes", "WeekNo": 1},
            {"FactGCategoryId": "FGC_DEFAULT", "FactGQuestionId": "GP2", "ScaleValue": "x", "FlagStatus": "Yes", "WeekNo": 1},
        ]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
