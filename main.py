#!/usr/bin/env python3
"""Run the content workflow end to end and save the results.

Usage:
    python main.py --url https://example.com                      # keywords -> draft -> article -> posts
    python main.py --url https://example.com --competitor https://rival.com --topic "best running shoes"
    python main.py --topic "best running shoes" --revise "Make it more casual"
    python main.py --analyze-url https://example.com/blog/post    # simulated performance report only
    python main.py --url https://example.com --remote             # go through a running serve.py
"""

import argparse
import getpass
import json
import logging
import os
import sys
from pathlib import Path

import markdown as md_lib

from content_assistant import config
from content_assistant.api_client import AssistantAPI
from content_assistant.export import save_performance_report
from content_assistant.validation import (
    format_validation_report,
    validate_article,
    validate_performance,
    validate_social_posts,
)
from content_assistant.workflow import LocalBackend, Phase, RemoteBackend, Workflow


def ensure_html(article: str) -> str:
    """Render the Markdown article as an HTML fragment."""
    return md_lib.markdown(article, extensions=["extra", "sane_lists", "smarty"])


def save_json(path: Path, data) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def build_workflow(args) -> Workflow:
    if not args.remote:
        try:
            return Workflow(LocalBackend())
        except ValueError as e:
            print(f"  FAIL {e}")
            sys.exit(1)

    backend = RemoteBackend(AssistantAPI(url=args.api_url))
    password = os.getenv("APP_PASSWORD") or getpass.getpass("Password: ")
    if not backend.login(password):
        print("Authentication failed.")
        sys.exit(1)
    return Workflow(backend)


def fail(workflow: Workflow) -> None:
    print(f"  FAIL {workflow.state.error}")
    sys.exit(1)


def run_preparation(workflow: Workflow, args, out_dir: Path) -> None:
    state = workflow.state

    # ── 1. Keyword analysis (optional) ────────────────────────────────
    if args.url:
        print(f"  -> Analyzing keywords for {args.url}...")
        result = workflow.analyze_keywords(args.url, args.competitor)
        if result is None:
            fail(workflow)
        print(f"  OK {len(result.keyword_analysis)} keywords")
        for kw in result.keyword_analysis:
            print(f"     - {kw.keyword} ({kw.search_volume} volume, {kw.difficulty} difficulty, rank {kw.current_rank})")
        save_json(out_dir / "keywords.json", result.to_wire())

    # ── 2. Topic ──────────────────────────────────────────────────────
    if args.topic:
        workflow.select_keyword(args.topic)
    elif state.keyword_analysis and state.keyword_analysis.keyword_analysis:
        workflow.select_keyword(state.keyword_analysis.keyword_analysis[0].keyword)
    print(f"  Topic: {state.topic or '(none)'}")

    # ── 3. Competitor articles ────────────────────────────────────────
    print("  -> Finding top competitor articles...")
    articles = workflow.find_competitor_articles()
    if articles is None:
        fail(workflow)
    print(f"  OK {len(articles)} articles")
    for a in articles:
        print(f"     - {a.title} ({a.url})")

    # ── 4. Composite draft ────────────────────────────────────────────
    print("  -> Creating composite draft...")
    draft = workflow.create_composite_article()
    if draft is None:
        fail(workflow)
    print(f"  OK \"{draft.outline.title}\" with {len(draft.outline.sections)} sections")
    save_json(out_dir / "draft.json", draft.to_wire())


def run_creation(workflow: Workflow, args, out_dir: Path) -> None:
    state = workflow.state

    print("  -> Generating article and social posts...")
    outcome = workflow.generate_article()
    if not outcome.ok:
        fail(workflow)
    print(f"  OK article: {len(outcome.article)} characters")
    if outcome.partial:
        print("  !! Social posts failed; the article was kept")

    for instruction in args.revise:
        if not workflow.can_revise(instruction):
            continue
        print(f"  -> Revising: {instruction}")
        if workflow.revise_article(instruction) is None:
            fail(workflow)
        print(f"  OK revised: {len(state.article)} characters")

    if state.social_posts is None:
        print("  -> Regenerating social posts for the final article...")
        if workflow.generate_social_posts() is None:
            print(f"  !! {state.error}")

    article_path = out_dir / "article.md"
    article_path.write_text(state.article, encoding="utf-8")
    (out_dir / "article.html").write_text(ensure_html(state.article), encoding="utf-8")
    print(f"  Saved to {article_path}")

    post_results = None
    if state.social_posts is not None:
        save_json(out_dir / "social_posts.json", state.social_posts.to_wire())
        post_results = validate_social_posts(state.social_posts)

    article_results = validate_article(state.article, state.draft)
    print()
    print(format_validation_report(article_results, state.draft.outline.title, post_results))


def run_analysis(workflow: Workflow, args, out_dir: Path) -> None:
    workflow.navigate(Phase.ANALYSIS)
    print(f"  -> Simulating performance for {args.analyze_url} (simulation, not measured data)...")
    analysis = workflow.analyze_performance(args.analyze_url, args.social_url)
    if analysis is None:
        fail(workflow)

    metrics = analysis.key_metrics
    print(f"  OK PV {metrics.monthly_pv}, users {metrics.users}, CVR {metrics.cvr}, bounce {metrics.bounce_rate}")
    for warning in validate_performance(analysis)["warnings"]:
        print(f"  ~ {warning}")
    path = save_performance_report(analysis, out_dir, args.analyze_url)
    print(f"  Saved to {path}")


def main():
    parser = argparse.ArgumentParser(description="SEO content assistant workflow")
    parser.add_argument("--url", default="", help="Your site URL for keyword analysis")
    parser.add_argument("--competitor", action="append", default=[], help="Competitor site URL (repeatable)")
    parser.add_argument("--topic", default="", help="Article topic (default: first suggested keyword)")
    parser.add_argument("--revise", action="append", default=[], help="Revision instruction (repeatable)")
    parser.add_argument("--analyze-url", default="", help="Published article URL for the simulated report")
    parser.add_argument("--social-url", default="", help="Social post URL for the simulated report")
    parser.add_argument("--output", default=str(config.OUTPUT_DIR), help="Output directory")
    parser.add_argument("--remote", action="store_true", help="Use a running server instead of calling Claude directly")
    parser.add_argument("--api-url", default=config.API_URL, help="Server endpoint for --remote")
    args = parser.parse_args()

    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if not (args.url or args.topic or args.analyze_url):
        parser.error("give --url, --topic or --analyze-url")

    out_dir = Path(args.output)
    out_dir.mkdir(parents=True, exist_ok=True)
    workflow = build_workflow(args)

    try:
        if args.url or args.topic:
            print(f"\n{'='*60}\nPREPARATION\n{'='*60}")
            run_preparation(workflow, args, out_dir)
            print(f"\n{'='*60}\nCREATION\n{'='*60}")
            run_creation(workflow, args, out_dir)

        if args.analyze_url:
            print(f"\n{'='*60}\nANALYSIS (SIMULATED)\n{'='*60}")
            run_analysis(workflow, args, out_dir)
    finally:
        if isinstance(workflow.backend, RemoteBackend):
            workflow.backend.api.end_session()
            workflow.backend.api.close()


if __name__ == "__main__":
    main()
