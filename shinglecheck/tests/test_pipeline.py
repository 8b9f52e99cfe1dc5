import pytest
import json
from pathlib import Path

TARGET_TEXT = (
    "Shingling compares documents by sliding a window over their words. "
    "Each window of consecutive words forms a shingle, and documents that share "
    "many shingles are likely to share copied passages."
)
COPIED_TEXT = (
    "Shingling compares documents by sliding a window over their words. "
    "Documents sharing many shingles probably contain copied passages."
)
UNRELATED_TEXT = (
    "Volcanic soils retain moisture well and support dense vegetation on "
    "slopes that would otherwise erode quickly during heavy seasonal rains."
)


def write_docs(tmp_path):
    paths = {}
    for name, text in [
        ("target.txt", TARGET_TEXT),
        ("copied.txt", COPIED_TEXT),
        ("unrelated.txt", UNRELATED_TEXT),
    ]:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        paths[name] = path
    return paths


class TestLoaders:
    def test_load_stopwords_lowercases(self, tmp_path):
        from shinglecheck.loaders import load_stopwords

        path = tmp_path / "stop.txt"
        path.write_text("The\nAND  of\n\tIs\n", encoding="utf-8")
        assert load_stopwords(path) == {"the", "and", "of", "is"}

    def test_missing_stopwords_file_gives_empty_set(self, tmp_path):
        from shinglecheck.loaders import load_stopwords

        assert load_stopwords(tmp_path / "missing.txt") == set()

    def test_default_stopwords_bundled(self):
        from shinglecheck.loaders import load_default_stopwords

        stopwords = load_default_stopwords()
        assert "the" in stopwords
        assert "don't" in stopwords
        assert all(w == w.lower() for w in stopwords)

    def test_read_document_utf8(self, tmp_path):
        from shinglecheck.loaders import read_document

        path = tmp_path / "doc.txt"
        path.write_text("naïve café", encoding="utf-8")
        assert read_document(path) == "naïve café"

    def test_read_document_non_utf8(self, tmp_path):
        from shinglecheck.loaders import read_document

        path = tmp_path / "latin.txt"
        path.write_bytes("Le café était très animé ce soir-là.".encode("latin-1"))
        text = read_document(path)
        assert isinstance(text, str)
        assert text.startswith("Le caf")

    def test_read_document_missing_raises(self, tmp_path):
        from shinglecheck.loaders import read_document

        with pytest.raises(FileNotFoundError):
            read_document(tmp_path / "missing.txt")


class TestConfig:
    def test_defaults(self):
        from shinglecheck.config import CheckerConfig, load_config

        config = load_config()
        assert config == CheckerConfig()
        assert config.k == 3
        assert config.bucket_count == 10007
        assert config.max_tokens == 10000
        assert config.strict is True

    def test_load_yaml(self, tmp_path):
        from shinglecheck.config import load_config

        path = tmp_path / "config.yaml"
        path.write_text("k: 4\nstrict: false\nmax_tokens: null\n", encoding="utf-8")
        config = load_config(path)
        assert config.k == 4
        assert config.strict is False
        assert config.max_tokens is None

    def test_empty_yaml_gives_defaults(self, tmp_path):
        from shinglecheck.config import CheckerConfig, load_config

        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == CheckerConfig()

    def test_unknown_key_rejected(self, tmp_path):
        from shinglecheck.config import load_config

        path = tmp_path / "config.yaml"
        path.write_text("k: 3\nshingle_size: 4\n", encoding="utf-8")
        with pytest.raises(ValueError, match="shingle_size"):
            load_config(path)

    def test_non_mapping_rejected(self, tmp_path):
        from shinglecheck.config import load_config

        path = tmp_path / "config.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(path)

    @pytest.mark.parametrize(
        "overrides",
        [{"k": 0}, {"k": -2}, {"bucket_count": 0}, {"max_tokens": 0}],
    )
    def test_invalid_values_rejected(self, overrides):
        from shinglecheck.config import CheckerConfig

        with pytest.raises(ValueError):
            CheckerConfig(**overrides)


class TestReports:
    def _report(self):
        from shinglecheck.analyzers.base import Document
        from shinglecheck.checker import PlagiarismChecker

        target = Document(name="target.txt", tokens="a b c d e".split())
        refs = [
            Document(name="ref1.txt", tokens="a b c d e".split()),
            Document(name="ref2.txt", tokens="v w x y z".split()),
        ]
        return PlagiarismChecker(target=target, references=refs).compare(2)

    def test_export_tokens(self, tmp_path):
        from shinglecheck.analyzers.base import Document
        from shinglecheck.reports import export_tokens

        doc = Document(name="d.txt", tokens=["alpha", "beta"])
        path = export_tokens(doc, tmp_path / "tokens.txt")
        assert path.read_text(encoding="utf-8") == "alpha\nbeta\n"

    def test_export_kgrams(self, tmp_path):
        from shinglecheck.analyzers.base import Document
        from shinglecheck.reports import export_kgrams

        doc = Document(name="d.txt", tokens="a b a b a".split())
        doc.generate_shingles(2)
        lines = export_kgrams(doc, tmp_path / "kgrams.txt").read_text().splitlines()
        assert lines[:4] == ["K-value: 2", "Total k-grams: 4", "Unique k-grams: 2", ""]
        assert sorted(lines[4:]) == ["a b (count: 2)", "b a (count: 2)"]

    def test_export_kgrams_follows_bucket_chains(self, tmp_path):
        from shinglecheck.analyzers.base import Document
        from shinglecheck.reports import export_kgrams

        doc = Document(name="d.txt", tokens="a b c d".split())
        doc.generate_shingles(2)
        path = export_kgrams(doc, tmp_path / "kgrams.txt", bucket_count=1)
        assert path.read_text(encoding="utf-8").splitlines()[4:] == [
            "c d (count: 1)",
            "b c (count: 1)",
            "a b (count: 1)",
        ]

    def test_export_kgrams_requires_shingles(self, tmp_path):
        from shinglecheck.analyzers.base import Document
        from shinglecheck.reports import export_kgrams

        with pytest.raises(ValueError):
            export_kgrams(Document(name="d.txt"), tmp_path / "kgrams.txt")

    def test_text_report_content(self):
        from shinglecheck.reports import format_text_report

        text = format_text_report(self._report(), analysis_date="2024-01-01")
        assert "PLAGIARISM DETECTION REPORT" in text
        assert "Analysis Date: 2024-01-01" in text
        assert "Target Document: target.txt" in text
        assert "1. ref1.txt" in text
        assert "2. ref2.txt" in text
        assert "Similarity Score: 100.00%" in text
        assert "Similarity Score: 0.00%" in text
        assert "OVERALL PLAGIARISM PERCENTAGE: 50.00%" in text
        assert "VERDICT: MODERATE SIMILARITY" in text

    def test_json_report_reloads(self, tmp_path):
        from shinglecheck.reports import load_json_report, save_json_report

        report = self._report()
        path = save_json_report(report, tmp_path / "out" / "report.json")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["overall_band"] == "Moderate"
        assert load_json_report(path) == report


class TestPipeline:
    @pytest.mark.timeout(10)
    def test_pipeline_runs_and_saves_reports(self, tmp_path):
        from shinglecheck.config import CheckerConfig
        from shinglecheck.pipeline import CheckPipeline

        paths = write_docs(tmp_path)
        output_dir = tmp_path / "output"
        pipeline = CheckPipeline(CheckerConfig(k=3), output_dir=output_dir)

        report = pipeline.run(
            paths["target.txt"], [paths["copied.txt"], paths["unrelated.txt"]]
        )
        assert report.target == str(paths["target.txt"])
        assert len(report.comparisons) == 2

        copied, unrelated = report.comparisons
        assert copied.combined > unrelated.combined
        assert unrelated.combined == 0.0
        assert (output_dir / "target_report.json").exists()
        assert (output_dir / "target_report.txt").exists()

    def test_missing_reference_is_skipped(self, tmp_path):
        from shinglecheck.pipeline import CheckPipeline

        paths = write_docs(tmp_path)
        pipeline = CheckPipeline(save_reports=False)
        report = pipeline.run(
            paths["target.txt"], [tmp_path / "missing.txt", paths["copied.txt"]]
        )
        assert [c.reference for c in report.comparisons] == [str(paths["copied.txt"])]

    def test_stopword_only_reference_scores_zero(self, tmp_path):
        from shinglecheck.pipeline import CheckPipeline

        paths = write_docs(tmp_path)
        stop = tmp_path / "stop.txt"
        stop.write_text("the and of the a", encoding="utf-8")
        report = CheckPipeline(save_reports=False).run(
            paths["target.txt"], [paths["copied.txt"], stop]
        )
        assert [c.reference for c in report.comparisons] == [
            str(paths["copied.txt"]),
            str(stop),
        ]
        assert report.comparisons[1].combined == 0.0

    def test_oversized_reference_is_skipped(self, tmp_path):
        from shinglecheck.config import CheckerConfig
        from shinglecheck.pipeline import CheckPipeline

        paths = write_docs(tmp_path)
        big = tmp_path / "big.txt"
        big.write_text(" ".join(f"word{i}" for i in range(60)), encoding="utf-8")
        pipeline = CheckPipeline(CheckerConfig(max_tokens=50), save_reports=False)

        report = pipeline.run(paths["target.txt"], [big, paths["copied.txt"]])
        assert [c.reference for c in report.comparisons] == [str(paths["copied.txt"])]

    def test_oversized_target_raises(self, tmp_path):
        from shinglecheck.config import CheckerConfig
        from shinglecheck.errors import NoTargetDocument
        from shinglecheck.pipeline import CheckPipeline

        paths = write_docs(tmp_path)
        pipeline = CheckPipeline(CheckerConfig(max_tokens=5), save_reports=False)
        with pytest.raises(NoTargetDocument):
            pipeline.run(paths["target.txt"], [paths["copied.txt"]])

    def test_missing_target_raises(self, tmp_path):
        from shinglecheck.errors import NoTargetDocument
        from shinglecheck.pipeline import CheckPipeline

        paths = write_docs(tmp_path)
        pipeline = CheckPipeline(save_reports=False)
        with pytest.raises(NoTargetDocument):
            pipeline.run(tmp_path / "missing.txt", [paths["copied.txt"]])

    def test_all_references_missing_raises(self, tmp_path):
        from shinglecheck.errors import NoReferenceDocuments
        from shinglecheck.pipeline import CheckPipeline

        paths = write_docs(tmp_path)
        pipeline = CheckPipeline(save_reports=False)
        with pytest.raises(NoReferenceDocuments):
            pipeline.run(paths["target.txt"], [tmp_path / "missing.txt"])

    def test_custom_stopwords_file(self, tmp_path):
        from shinglecheck.config import CheckerConfig
        from shinglecheck.pipeline import CheckPipeline

        stop = tmp_path / "stop.txt"
        stop.write_text("shingling\n", encoding="utf-8")
        paths = write_docs(tmp_path)
        pipeline = CheckPipeline(
            CheckerConfig(stopwords_path=str(stop)), save_reports=False
        )
        doc = pipeline.load(paths["target.txt"])
        assert "shingling" not in doc.tokens
        assert "their" in doc.tokens

    def test_k_override(self, tmp_path):
        from shinglecheck.pipeline import CheckPipeline

        paths = write_docs(tmp_path)
        report = CheckPipeline(save_reports=False).run(
            paths["target.txt"], [paths["copied.txt"]], k=1
        )
        assert report.k == 1


class TestCLI:
    @pytest.mark.timeout(10)
    def test_check_command(self, tmp_path):
        from shinglecheck.cli.main import main

        paths = write_docs(tmp_path)
        output_dir = tmp_path / "output"
        result = main(
            [
                "check",
                str(paths["target.txt"]),
                str(paths["copied.txt"]),
                str(paths["unrelated.txt"]),
                "-o",
                str(output_dir),
            ]
        )
        assert result == 0
        assert (output_dir / "target_report.json").exists()

    def test_check_command_invalid_k(self, tmp_path):
        from shinglecheck.cli.main import main

        paths = write_docs(tmp_path)
        args = ["check", str(paths["target.txt"]), str(paths["copied.txt"])]
        assert main(args + ["-k", "500", "-o", str(tmp_path / "o")]) == 1
        assert main(args + ["-k", "0", "-o", str(tmp_path / "o")]) == 2

    def test_check_command_lenient(self, tmp_path):
        from shinglecheck.cli.main import main

        paths = write_docs(tmp_path)
        short = tmp_path / "short.txt"
        short.write_text("tiny text", encoding="utf-8")
        args = [
            "check",
            str(paths["target.txt"]),
            str(short),
            "-o",
            str(tmp_path / "o"),
            "--lenient",
        ]
        assert main(args) == 0

    def test_shingles_command(self, tmp_path):
        from shinglecheck.cli.main import main

        paths = write_docs(tmp_path)
        output_dir = tmp_path / "output"
        result = main(
            ["shingles", str(paths["target.txt"]), "-k", "2", "-o", str(output_dir)]
        )
        assert result == 0
        kgrams = (output_dir / "target_kgrams.txt").read_text(encoding="utf-8")
        assert kgrams.startswith("K-value: 2\n")
        assert (output_dir / "target_tokens.txt").exists()

    def test_visualize_command_no_html(self, tmp_path):
        from shinglecheck.cli.main import main
        from shinglecheck.pipeline import CheckPipeline
        from shinglecheck.reports import save_json_report

        paths = write_docs(tmp_path)
        report = CheckPipeline(save_reports=False).run(
            paths["target.txt"], [paths["copied.txt"]]
        )
        report_file = save_json_report(report, tmp_path / "report.json")
        output_dir = tmp_path / "output"

        result = main(
            ["visualize", "-i", str(report_file), "-o", str(output_dir), "--no-html"]
        )
        assert result == 0
        assert not (output_dir / "report.html").exists()

    def test_shingles_command_missing_file(self, tmp_path):
        from shinglecheck.cli.main import main

        assert main(["shingles", str(tmp_path / "missing.txt")]) == 1

    def test_no_command_prints_help(self):
        from shinglecheck.cli.main import main

        assert main([]) == 0
