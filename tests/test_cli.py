import json
from datetime import datetime, timedelta, timezone

import pytest
import yaml

from newsrank.cli import load_history, load_rows, main


def iso(hours_ago):
    return (datetime.now(timezone.utc) - timedelta(hours=hours_ago)).isoformat()


@pytest.fixture
def articles_file(tmp_path):
    rows = [
        {"id": "a", "title": "Parliament passes budget", "source": "Wire", "category": "politics",
         "sentiment": "positive", "sentiment_score": 0.8, "published_at": iso(100),
         "keywords": ["budget", "tax"]},
        {"id": "b", "title": "Budget vote tonight", "source": "Daily", "category": "politics",
         "sentiment": "negative", "sentiment_score": 0.4, "published_at": iso(110),
         "keywords": ["Budget", "tax", "vote"]},
        {"id": "c", "title": "Comet sighted overhead", "source": "Sky", "category": "science",
         "sentiment": "neutral", "sentiment_score": 0.5, "published_at": iso(120),
         "keywords": ["comet"]},
    ]
    path = tmp_path / "articles.json"
    path.write_text(json.dumps({"articles": rows}))
    return str(path)


@pytest.fixture
def history_file(tmp_path):
    rows = [{"news_id": "a", "category": "politics", "keywords": ["budget"], "reading_time": 120}]
    path = tmp_path / "history.yaml"
    path.write_text(yaml.safe_dump(rows))
    return str(path)


def test_recommend_json(articles_file, history_file, capsys):
    code = main(["--articles", articles_file, "--history", history_file, "--format", "json", "recommend"])
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert [a["id"] for a in payload["recommendations"]] == ["b"]
    assert payload["profile"]["category_weights"] == {"politics": 2}


def test_similar_markdown(articles_file, capsys):
    assert main(["--articles", articles_file, "similar", "a"]) == 0
    out = capsys.readouterr().out
    assert "# Similar To: Parliament passes budget" in out
    assert "Budget vote tonight" in out
    assert "Comet sighted overhead" not in out


def test_cluster_json(articles_file, capsys):
    assert main(["--articles", articles_file, "--format", "json", "cluster"]) == 0
    groups = json.loads(capsys.readouterr().out)
    assert len(groups) == 1
    assert groups[0]["topic"] == "Budget"
    assert [a["id"] for a in groups[0]["news"]] == ["a", "b"]


def test_compare_writes_html(articles_file, tmp_path):
    output = tmp_path / "compare.html"
    code = main(["--articles", articles_file, "--format", "html", "--output", str(output),
                 "compare", "a", "b", "missing"])
    assert code == 0
    html = output.read_text()
    assert html.startswith("<!DOCTYPE html>")
    assert "Average sentiment: 60%" in html


def test_stats(articles_file, history_file, capsys):
    assert main(["--articles", articles_file, "--history", history_file, "stats"]) == 0
    out = capsys.readouterr().out
    assert "Articles read: 1" in out
    assert "politics: 1" in out


def test_missing_inputs_fail(capsys):
    assert main(["cluster"]) == 1


def test_missing_file_fails(tmp_path):
    assert main(["--articles", str(tmp_path / "nope.json"), "cluster"]) == 1


def test_load_rows_rejects_ambiguous_mapping(tmp_path):
    path = tmp_path / "rows.json"
    path.write_text(json.dumps({"a": [], "b": []}))
    with pytest.raises(ValueError):
        load_rows(str(path))


def test_load_history_accepts_reading_time_seconds(tmp_path):
    path = tmp_path / "history.json"
    path.write_text(json.dumps([{"news_id": "x", "category": "crime", "reading_time_seconds": 30}]))
    records = load_history(str(path))
    assert records[0].reading_time == 30
    assert records[0].category == "crime"
