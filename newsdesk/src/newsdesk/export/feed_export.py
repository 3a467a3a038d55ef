import csv
import json
from pathlib import Path
from typing import Any, Dict, List

from ..models.article import Article

CSV_HEADERS = ['publishedAt', 'publishedRelative', 'title', 'category', 'sentiment', 'source', 'url', 'id']


def get_export_dir(region: str, root: str = "./exports") -> Path:
    """
    Get (and create) export directory for a region.
    Structure: {root}/feeds/{region}/
    """
    path = Path(root) / "feeds" / region
    path.mkdir(parents=True, exist_ok=True)
    return path


def export_json(data: Any, path: Path):
    with open(path, 'w') as f:
        json.dump(data, f, indent=2, sort_keys=True, default=str)


def export_csv(rows: List[Dict[str, Any]], path: Path):
    with open(path, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=CSV_HEADERS, extrasaction='ignore')
        writer.writeheader()
        writer.writerows(rows)


def export_md(rows: List[Dict[str, Any]], path: Path, region: str):
    lines = []
    lines.append(f"# Market News ({region})")
    lines.append("")

    for item in rows:
        lines.append(f"## {item.get('title')}")
        lines.append(
            f"**Source**: {item.get('source')} | **Category**: {item.get('category')} "
            f"| **Sentiment**: {item.get('sentiment')} | {item.get('publishedRelative')}"
        )
        if item.get('url'):
            lines.append(f"[Read Article]({item.get('url')})")
        lines.append("")

    with open(path, 'w') as f:
        f.write("\n".join(lines))


def export_feed(articles: List[Article], out_root: str = "./exports", region: str = "all") -> Dict[str, str]:
    """Write the feed as JSON, CSV and Markdown. Returns the written paths."""
    export_dir = get_export_dir(region, root=out_root)
    rows = [a.model_dump(mode="json", by_alias=True) for a in articles]

    paths = {
        "json": export_dir / "feed.json",
        "csv": export_dir / "feed.csv",
        "markdown": export_dir / "feed.md",
    }
    export_json(rows, paths["json"])
    export_csv(rows, paths["csv"])
    export_md(rows, paths["markdown"], region)
    return {k: str(v) for k, v in paths.items()}
