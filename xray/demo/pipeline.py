"""xray.demo.pipeline

Mock three-stage competitor-selection pipeline used to generate sample records:

  keyword_generation (keyword-service)
    -> candidate_search (search-service)
    -> filter_and_rank  (ranking-service, the decision step)

The bad run lowers the reference price to 3.00 so the price window [1.5, 6.0]
excludes every reasonable candidate and the ranking step ends in a warning.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any

from xray.paths import data_dir
from xray.tracing import XRayTracer

MIN_RATING = 3.8
MIN_REVIEWS = 100
BAD_RUN_PRICE = 3.00
# Sample runs must stay further apart than the 15 s anchor window, or they stitch together.
RUN_GAP_MS = 60_000


@dataclass(frozen=True)
class Product:
    asin: str
    title: str
    price: float
    rating: float
    reviews: int


REFERENCE_PRODUCT = Product(
    asin="REF001",
    title="ProBrand Stainless Steel Water Bottle 32oz Insulated",
    price=29.99,
    rating=4.2,
    reviews=1247,
)


def load_products(path: str | Path | None = None) -> list[Product]:
    p = Path(path) if path else (data_dir() / "dummy_products.json")
    rows = json.loads(p.read_text(encoding="utf-8"))
    return [Product(**row) for row in rows]


def generate_keywords(tracer: XRayTracer, product: Product) -> list[str]:
    token = tracer.begin_step("keyword-service", "keyword_generation", asdict(product))

    keywords = [
        "stainless steel water bottle insulated",
        "vacuum insulated bottle 32oz",
        "metal water bottle 32oz",
    ]

    tracer.complete_step(
        token,
        "keyword-service",
        "keyword_generation",
        "success",
        keywords,
        {
            "reasoning": "Extracted key attributes: material (stainless steel), capacity (32oz), feature (insulated)",
            "model": "mock-gpt-4",
        },
        asdict(product),
    )
    return keywords


def search_candidates(tracer: XRayTracer, keywords: list[str], catalog: list[Product]) -> list[Product]:
    token = tracer.begin_step("search-service", "candidate_search", {"keywords": keywords})

    candidates = list(catalog)

    tracer.complete_step(
        token,
        "search-service",
        "candidate_search",
        "success",
        [asdict(c) for c in candidates],
        {
            "reasoning": f"Mock search for keywords: {', '.join(keywords)}. Returned {len(candidates)} candidate products.",
            "total_results_simulated": 2847,
            "candidates_fetched": len(candidates),
        },
        {"keywords": keywords},
    )
    return candidates


def evaluate(candidate: Product, min_price: float, max_price: float) -> dict[str, Any]:
    price_passed = min_price <= candidate.price <= max_price
    rating_passed = candidate.rating >= MIN_RATING
    reviews_passed = candidate.reviews >= MIN_REVIEWS
    return {
        **asdict(candidate),
        "passed": price_passed and rating_passed and reviews_passed,
        "details": {
            "price": {"passed": price_passed, "actual": candidate.price, "range": [min_price, max_price]},
            "rating": {"passed": rating_passed, "actual": candidate.rating, "threshold": MIN_RATING},
            "reviews": {"passed": reviews_passed, "actual": candidate.reviews, "threshold": MIN_REVIEWS},
        },
    }


def filter_and_rank(tracer: XRayTracer, reference: Product, candidates: list[Product]) -> dict[str, Any]:
    step_input = {"reference_product": asdict(reference), "candidates_count": len(candidates)}
    token = tracer.begin_step("ranking-service", "filter_and_rank", step_input)

    min_price = reference.price * 0.5
    max_price = reference.price * 2

    evaluations = [evaluate(c, min_price, max_price) for c in candidates]
    qualified = [e for e in evaluations if e["passed"]]

    if not qualified:
        reasoning = "No candidates passed all filters: filters were too strict given the reference price."
        selected: dict[str, Any] = {"fallback": True, "message": "No competitor found"}
    else:
        qualified.sort(key=lambda e: (e["reviews"], e["rating"]), reverse=True)
        selected = qualified[0]
        reasoning = (
            f"Selected \"{selected['title']}\": highest review count ({selected['reviews']}) "
            f"among {len(qualified)} qualified candidates."
        )

    tracer.complete_step(
        token,
        "ranking-service",
        "filter_and_rank",
        "success" if qualified else "warning",
        selected,
        {
            "reasoning": reasoning,
            "filters_applied": {
                "price_range": {"min": min_price, "max": max_price},
                "min_rating": MIN_RATING,
                "min_reviews": MIN_REVIEWS,
            },
            "evaluations": evaluations,
            "qualified_count": len(qualified),
        },
        step_input,
    )
    return selected


def run_pipeline(
    tracer: XRayTracer,
    bad_run: bool = False,
    catalog: list[Product] | None = None,
    logger: logging.Logger | None = None,
) -> dict[str, Any]:
    logger = logger or logging.getLogger(__name__)
    reference = replace(REFERENCE_PRODUCT, price=BAD_RUN_PRICE) if bad_run else REFERENCE_PRODUCT
    logger.info("=== Starting %s run ===", "BAD (no competitor found)" if bad_run else "GOOD")

    keywords = generate_keywords(tracer, reference)
    candidates = search_candidates(tracer, keywords, catalog if catalog is not None else load_products())
    result = filter_and_rank(tracer, reference, candidates)

    logger.info("Final result: %s", result.get("title") or result.get("message"))
    return result


def generate_fixtures(
    tracer: XRayTracer,
    catalog: list[Product] | None = None,
    logger: logging.Logger | None = None,
    run_gap_ms: int = RUN_GAP_MS,
) -> list[dict[str, Any]]:
    """Fresh store with one good and one bad sample run.

    The good run is stamped `run_gap_ms` in the past so the two runs never share
    a correlation window.
    """
    tracer.clear()
    catalog = catalog if catalog is not None else load_products()
    return [
        run_pipeline(tracer.shifted(-run_gap_ms), bad_run=False, catalog=catalog, logger=logger),
        run_pipeline(tracer, bad_run=True, catalog=catalog, logger=logger),
    ]
