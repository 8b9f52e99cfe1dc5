import pytest
from shinglecheck.analyzers.base import Document, SimilarityBand
from shinglecheck.analyzers.shingles import ShingleSet
from shinglecheck.checker import (
    PlagiarismChecker,
    classify_overall,
    classify_pair,
    combined_score,
)
from shinglecheck.errors import InvalidK, NoReferenceDocuments, NoTargetDocument


def make_doc(name, text):
    return Document(name=name, raw_text=text, tokens=text.split())


def doc_with_shingles(name, shingles, k=3):
    doc = Document(name=name)
    doc.shingle_set = ShingleSet.from_shingles(shingles, k)
    return doc


class TestClassification:
    @pytest.mark.parametrize(
        "score,band",
        [
            (1.0, SimilarityBand.HIGH),
            (0.7, SimilarityBand.HIGH),
            (0.69, SimilarityBand.MODERATE),
            (0.4, SimilarityBand.MODERATE),
            (0.39, SimilarityBand.LOW),
            (0.1, SimilarityBand.LOW),
            (0.09, SimilarityBand.MINIMAL),
            (0.0, SimilarityBand.MINIMAL),
        ],
    )
    def test_pair_bands(self, score, band):
        assert classify_pair(score) == band

    @pytest.mark.parametrize(
        "score,band",
        [
            (0.6, SimilarityBand.HIGH),
            (0.59, SimilarityBand.MODERATE),
            (0.3, SimilarityBand.MODERATE),
            (0.29, SimilarityBand.LOW),
            (0.1, SimilarityBand.LOW),
            (0.05, SimilarityBand.MINIMAL),
        ],
    )
    def test_overall_bands(self, score, band):
        assert classify_overall(score) == band

    def test_pair_and_overall_scales_differ(self):
        assert classify_pair(0.65) == SimilarityBand.MODERATE
        assert classify_overall(0.65) == SimilarityBand.HIGH
        assert classify_pair(0.35) == SimilarityBand.LOW
        assert classify_overall(0.35) == SimilarityBand.MODERATE

    def test_combined_weights(self):
        assert combined_score(1.0, 0.0) == pytest.approx(0.6)
        assert combined_score(0.0, 1.0) == pytest.approx(0.4)
        assert combined_score(1.0, 1.0) == pytest.approx(1.0)

    def test_computed_boundary_is_inclusive(self):
        score = combined_score(1 / 3, 0.5)
        assert score == pytest.approx(0.4)
        assert classify_pair(score) == SimilarityBand.MODERATE


class TestPlagiarismChecker:
    def test_pair_scenario_scores(self):
        target = doc_with_shingles("target.txt", ["a b c", "b c d"])
        reference = doc_with_shingles("ref.txt", ["a b c", "x y z"])
        checker = PlagiarismChecker(target=target, references=[reference])

        report = checker.compare(3)
        result = report.comparisons[0]
        assert result.reference == "ref.txt"
        assert result.jaccard == pytest.approx(1 / 3)
        assert result.cosine == pytest.approx(0.5)
        assert result.combined == pytest.approx(0.4)
        assert result.band == SimilarityBand.MODERATE
        assert report.overall == pytest.approx(0.4)
        assert report.overall_band == SimilarityBand.MODERATE

    def test_overall_is_mean_of_combined_scores(self):
        text = "alpha beta gamma delta epsilon zeta"
        target = make_doc("target.txt", text)
        same = make_doc("same.txt", text)
        other = make_doc("other.txt", "one two three four five six")
        checker = PlagiarismChecker(target=target, references=[same, other])

        report = checker.compare(3)
        assert [c.combined for c in report.comparisons] == [
            pytest.approx(1.0),
            pytest.approx(0.0),
        ]
        assert [c.band for c in report.comparisons] == [
            SimilarityBand.HIGH,
            SimilarityBand.MINIMAL,
        ]
        assert report.overall == pytest.approx(0.5)
        assert report.overall_band == SimilarityBand.MODERATE
        assert report.reference_count == 2
        assert checker.last_report is report

    def test_result_order_follows_references(self):
        target = make_doc("t", "a b c d e")
        refs = [make_doc(f"r{i}", "a b c d e") for i in range(4)]
        checker = PlagiarismChecker(target=target)
        for ref in refs:
            checker.add_reference(ref)

        report = checker.compare(2)
        assert [c.reference for c in report.comparisons] == ["r0", "r1", "r2", "r3"]

    def test_no_target_raises(self):
        checker = PlagiarismChecker(references=[make_doc("r", "a b c")])
        with pytest.raises(NoTargetDocument):
            checker.compare(2)
        assert checker.last_report is None

    def test_no_references_raises(self):
        target = make_doc("t", "a b c d")
        checker = PlagiarismChecker(target=target)
        with pytest.raises(NoReferenceDocuments):
            checker.compare(2)
        assert checker.last_report is None
        assert target.shingle_set is None

    def test_invalid_k_propagates_in_strict_mode(self):
        target = make_doc("t", "one two three four five")
        checker = PlagiarismChecker(target=target, references=[make_doc("r", "one two")])
        with pytest.raises(InvalidK):
            checker.compare(10)
        assert checker.last_report is None

    def test_empty_reference_scores_zero_in_strict_mode(self):
        target = make_doc("t", "one two three four five")
        empty = make_doc("empty", "")
        match = make_doc("match", "one two three four five")
        checker = PlagiarismChecker(target=target, references=[empty, match])

        report = checker.compare(3)
        assert [c.reference for c in report.comparisons] == ["empty", "match"]
        assert report.comparisons[0].combined == 0.0
        assert report.comparisons[0].band == SimilarityBand.MINIMAL
        assert report.comparisons[1].combined == pytest.approx(1.0)
        assert report.overall == pytest.approx(0.5)
        assert empty.shingle_set.is_empty()
        assert empty.k == 3

    def test_empty_target_scores_zero_in_strict_mode(self):
        checker = PlagiarismChecker(
            target=make_doc("t", ""), references=[make_doc("r", "a b c d")]
        )
        report = checker.compare(2)
        assert report.overall == 0.0
        assert report.overall_band == SimilarityBand.MINIMAL

    def test_lenient_mode_scores_short_documents_zero(self):
        target = make_doc("t", "one two three four five")
        short = make_doc("short", "one two")
        empty = make_doc("empty", "")
        match = make_doc("match", "one two three four five")
        checker = PlagiarismChecker(
            target=target, references=[short, empty, match], strict=False
        )

        report = checker.compare(3)
        scores = {c.reference: c.combined for c in report.comparisons}
        assert scores["short"] == 0.0
        assert scores["empty"] == 0.0
        assert scores["match"] == pytest.approx(1.0)
        assert short.shingle_set.is_empty()
        assert short.k == 3

    def test_rebuilds_shingles_for_new_k(self):
        target = make_doc("t", "a b c d e f")
        ref = make_doc("r", "a b c x y z")
        checker = PlagiarismChecker(target=target, references=[ref])

        first = checker.compare(3)
        assert target.k == 3 and ref.k == 3

        second = checker.compare(1)
        assert target.k == 1 and ref.k == 1
        assert second.k == 1
        assert second.comparisons[0].jaccard > first.comparisons[0].jaccard

    def test_references_are_not_copied(self):
        ref = make_doc("r", "a b c")
        checker = PlagiarismChecker(target=make_doc("t", "a b c"), references=[ref])
        checker.compare(2)
        assert checker.references[0] is ref
        assert ref.k == 2

    def test_report_dict_has_required_fields(self):
        target = doc_with_shingles("target.txt", ["a b c", "b c d"])
        reference = doc_with_shingles("ref.txt", ["a b c", "x y z"])
        report = PlagiarismChecker(target=target, references=[reference]).compare(3)

        data = report.to_dict()
        assert data["target"] == "target.txt"
        assert data["overall_band"] == "Moderate"
        assert data["overall_percent"] == pytest.approx(40.0)
        entry = data["comparisons"][0]
        assert entry["reference"] == "ref.txt"
        assert entry["jaccard_percent"] == pytest.approx(100 / 3)
        assert entry["cosine_percent"] == pytest.approx(50.0)
        assert entry["combined_percent"] == pytest.approx(40.0)
        assert entry["band"] == "Moderate"
