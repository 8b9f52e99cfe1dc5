#!/usr/bin/env python3
"""
ShingleCheck Demo - Full check of one target against four references,
with timing and hash table statistics.

Usage:
    python3 demo_pipeline.py
"""

import time
from pathlib import Path
from datetime import datetime


class Timer:
    def __init__(self, name):
        self.name = name
        self.start = None
        self.elapsed = None

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, *args):
        self.elapsed = time.perf_counter() - self.start


SAMPLES = {
    "target_paper": (
        "Machine learning is a field of study that gives computers the ability "
        "to learn without being explicitly programmed. Supervised learning uses "
        "labeled examples to train a model that maps inputs to outputs. "
        "Unsupervised learning finds hidden structure in unlabeled data such as "
        "clusters of similar documents."
    ),
    "research_paper1": (
        "Machine learning is a field of study that gives computers the ability "
        "to learn without being explicitly programmed. Supervised learning uses "
        "labeled examples to train a model that maps inputs to outputs."
    ),
    "research_paper2": (
        "Unsupervised learning finds hidden structure in unlabeled data. "
        "Common methods include clustering, density estimation and "
        "dimensionality reduction of large document collections."
    ),
    "research_paper3": (
        "Neural networks are composed of layers of simple units. Each unit "
        "computes a weighted sum of its inputs and applies a nonlinear "
        "activation before passing the result forward."
    ),
    "research_paper4": (
        "The migration routes of arctic terns span both hemispheres, and the "
        "birds rely on prevailing winds to cross open ocean each season."
    ),
}


def create_sample_texts(output_dir: Path):
    """Write the sample target and reference documents as text files."""
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = {}
    for name, text in SAMPLES.items():
        path = output_dir / f"{name}.txt"
        path.write_text(text, encoding="utf-8")
        paths[name] = path
    return paths


def print_section(title):
    print(f"\n{'=' * 60}")
    print(f" {title}")
    print(f"{'=' * 60}")


def format_time(seconds):
    if seconds < 0.001:
        return f"{seconds * 1000000:.0f}µs"
    elif seconds < 1:
        return f"{seconds * 1000:.1f}ms"
    else:
        return f"{seconds:.2f}s"


def format_stats(stats, indent=2):
    indent_str = " " * indent
    lines = []
    for k, v in stats.items():
        if isinstance(v, float):
            lines.append(f"{indent_str}{k}: {v:.4f}")
        else:
            lines.append(f"{indent_str}{k}: {v}")
    return "\n".join(lines)


def run_demo(k=3):
    print_section("SHINGLECHECK PIPELINE DEMO")
    print(f"Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

    base_dir = Path("/tmp/shinglecheck_demo")
    text_dir = base_dir / "texts"
    output_dir = base_dir / "output"

    timings = {}

    print_section("1. CREATING SAMPLE TEXTS")
    with Timer("text_creation") as t:
        paths = create_sample_texts(text_dir)
    timings["text_creation"] = t.elapsed

    print(f"Created {len(paths)} documents in {format_time(t.elapsed)}")
    for p in paths.values():
        print(f"  - {p.name}")

    print_section("2. TOKENIZATION PHASE")
    from shinglecheck.analyzers.tokenizer import DocumentTokenizer
    from shinglecheck.loaders import read_document

    tokenizer = DocumentTokenizer()
    documents = {}

    for name, path in paths.items():
        with Timer(f"tokenize_{name}") as t:
            doc = tokenizer.tokenize(path.name, read_document(path))
        timings[f"tokenize_{name}"] = t.elapsed
        documents[name] = doc

        print(f"\n{path.name}:")
        print(f"  Time: {format_time(t.elapsed)}")
        print(f"  Tokens: {len(doc.tokens)}")
        print(f"  Unique: {len(set(doc.tokens))}")

    print_section(f"3. SHINGLING PHASE (k={k})")
    from shinglecheck.analyzers.shingles import hash_table_stats

    for name, doc in documents.items():
        with Timer(f"shingle_{name}") as t:
            shingle_set = doc.generate_shingles(k)
        timings[f"shingle_{name}"] = t.elapsed

        print(f"\n{doc.name}:")
        print(f"  Time: {format_time(t.elapsed)}")
        print(f"  K-grams: {len(doc.kgrams)} ({shingle_set.count} unique)")
        print(format_stats(hash_table_stats(shingle_set).to_dict(), indent=4))

    print_section("4. SIMILARITY ANALYSIS")
    from shinglecheck.checker import PlagiarismChecker

    target = documents.pop("target_paper")
    checker = PlagiarismChecker(target=target, references=list(documents.values()))

    with Timer("compare") as t:
        report = checker.compare(k)
    timings["compare"] = t.elapsed

    print(f"Compared against {report.reference_count} references in "
          f"{format_time(t.elapsed)}")
    print(f"\n{'Reference':<22} {'Jaccard':>9} {'Cosine':>9} {'Score':>9}  Status")
    print("-" * 60)
    for c in report.comparisons:
        print(
            f"{c.reference:<22} {c.jaccard_percent:>8.2f}% {c.cosine_percent:>8.2f}% "
            f"{c.combined_percent:>8.2f}%  {c.band.value}"
        )
    print(f"\nOverall: {report.overall_percent:.2f}% ({report.overall_band.value})")
    print(report.verdict)

    print_section("5. REPORTS")
    from shinglecheck.reports import export_kgrams, export_results, save_json_report
    from shinglecheck.visualizers.html_report import generate_html_report

    with Timer("reports") as t:
        export_kgrams(target, output_dir / "target_paper_kgrams.txt")
        export_results(report, output_dir / "plagiarism_report.txt")
        save_json_report(report, output_dir / "plagiarism_report.json")
        report_path = generate_html_report(report, output_dir)
    timings["reports"] = t.elapsed

    print(f"\nHTML Report: {report_path}")
    print(f"Generated in {format_time(t.elapsed)}")

    print_section("6. TIMING SUMMARY")

    categories = {
        "Sample Texts": ["text_creation"],
        "Tokenization": [k for k in timings if k.startswith("tokenize_")],
        "Shingling": [k for k in timings if k.startswith("shingle_")],
        "Comparison": ["compare"],
        "Reports": ["reports"],
    }

    grand_total = 0
    print(f"\n{'Category':<25} {'Time':>12}")
    print("-" * 40)

    for cat, keys in categories.items():
        cat_time = sum(timings.get(key, 0) for key in keys)
        grand_total += cat_time
        if cat_time > 0:
            print(f"{cat:<25} {format_time(cat_time):>12}")

    print("-" * 40)
    print(f"{'TOTAL':<25} {format_time(grand_total):>12}")

    print_section("DEMO COMPLETE")
    print(f"\nOutput directory: {output_dir}")
    for f in sorted(output_dir.iterdir()):
        print(f"  {f.name}: {f.stat().st_size} B")

    return report, timings


if __name__ == "__main__":
    run_demo()
