import argparse
import json
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.configs.settings import BASE_PATH
from src.configs.sources_iwu import SOURCES_IWU
from src.configs.sources_reference import SOURCES_REFERENCE
from src.raw_table_inspector.inspector import parse_config, inspect_dtypes, inspect_column_names


def inspect_all_sources(sources: dict, base_path: Path | None = None, names: bool = False) -> dict:
    results = {}
    for name, cfg in sources.items():
        try:
            frames = parse_config(cfg, base_path=base_path)
        except (FileNotFoundError, ValueError) as e:
            results[name] = type(e).__name__ + ": " + str(e)
            continue
        for file_name, df in frames.items():
            key = f"{name}/{file_name}"
            if names and "id_column" in cfg:
                results[key] = inspect_column_names(df, cfg["id_column"], cfg["names_sep"], cfg["measures"])
            else:
                results[key] = inspect_dtypes(df)
    return results


def _dataframe_to_markdown(df) -> str:
    """Format a DataFrame as a markdown table without requiring tabulate."""
    rows = [list(df.columns)]
    for _, r in df.iterrows():
        rows.append([str(x) for x in r])
    ncols = len(rows[0])
    widths = [max(len(str(rows[i][j])) for i in range(len(rows))) for j in range(ncols)]
    lines = []
    for i, row in enumerate(rows):
        line = "| " + " | ".join(str(x).ljust(widths[j]) for j, x in enumerate(row)) + " |"
        lines.append(line)
        if i == 0:
            sep = "| " + " | ".join(":" + "-" * max(2, w) for w in widths) + " |"
            lines.append(sep)
    return "\n".join(lines)


def inspect_to_markdown(results: dict) -> str:
    blocks = []
    for name, value in results.items():
        blocks.append(f"## {name}")
        if isinstance(value, str):
            blocks.append(f"`{value}`")
        else:
            blocks.append(_dataframe_to_markdown(value))
    return "\n\n".join(blocks)


def results_to_json(results: dict) -> dict:
    """Convert inspection results to a JSON-serializable dict."""
    out = {}
    for name, value in results.items():
        if isinstance(value, str):
            out[name] = {"error": value}
        else:
            out[name] = value.astype(object).where(value.notna(), None).to_dict(orient="records")
    return out


def main():
    parser = argparse.ArgumentParser(
        description="Inspect raw IWU, USGS and reference tables and report dtypes or column-name parses."
    )
    parser.add_argument(
        "--which",
        choices=["irrigation", "usgs", "reference", "all"],
        default="all",
        help="Which source to inspect.",
    )
    parser.add_argument(
        "--names",
        action="store_true",
        help="For IWU files, report the measure/crop/year parse of each column instead of dtypes.",
    )
    parser.add_argument(
        "--out",
        type=str,
        default="",
        help="Output file path. Use .json for JSON or .md for markdown; if empty, print to stdout.",
    )
    parser.add_argument(
        "--base-path",
        type=str,
        default=None,
        help="Project root for resolving relative paths (default: IWU_BASE_PATH or project root).",
    )
    args = parser.parse_args()

    base_path = Path(args.base_path) if args.base_path else BASE_PATH

    selected = {}
    if args.which in ("irrigation", "all"):
        selected["irrigation"] = SOURCES_IWU["irrigation"]
    if args.which in ("usgs", "all"):
        selected["usgs"] = SOURCES_IWU["usgs"]
    if args.which in ("reference", "all"):
        selected.update({f"reference.{k}": v for k, v in SOURCES_REFERENCE.items()})

    results = inspect_all_sources(selected, base_path=base_path, names=args.names)
    as_json = args.out.lower().endswith(".json") if args.out else False

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        if as_json:
            out_path.write_text(json.dumps(results_to_json(results), indent=2), encoding="utf-8")
        else:
            out_path.write_text(inspect_to_markdown(results), encoding="utf-8")
        print(f"Wrote inspection report to: {out_path}")
    else:
        print(inspect_to_markdown(results))


if __name__ == "__main__":
    main()
