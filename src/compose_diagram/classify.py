"""Classifier — assign each service node to a semantic tier.

Rules are plain data: an ordered table of ``(keyword, tier)`` pairs checked
against the lower-cased node id and image. The first matching rule wins and
nodes matching nothing land in the middle tier. All data-store keywords are
listed before the edge keywords, so a node that looks like both (say
``web-db``) is placed in the data tier.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

from compose_diagram.types import TIER_COUNT, Node, Tier

# ─── Rule Table ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class KeywordRule:
    """Substring ``keyword`` (lower-case) places a node in ``tier``."""

    keyword: str
    tier: Tier


DATA_KEYWORDS: tuple[str, ...] = (
    # database engines
    "postgres",
    "mysql",
    "mariadb",
    "mongo",
    "redis",
    "memcached",
    "cassandra",
    "couchdb",
    "neo4j",
    "influx",
    "clickhouse",
    "sqlite",
    "dynamo",
    # message brokers
    "kafka",
    "rabbitmq",
    "nats",
    "zookeeper",
    "activemq",
    # search engines
    "elasticsearch",
    "opensearch",
    "solr",
    "meilisearch",
    # storage services
    "minio",
    "s3",
    "ceph",
    # generic
    "database",
    "db",
    "store",
    "bucket",
    "broker",
)

FRONTEND_KEYWORDS: tuple[str, ...] = (
    # reverse proxies and load balancers
    "nginx",
    "traefik",
    "haproxy",
    "envoy",
    "caddy",
    "httpd",
    "apache",
    # UI frameworks
    "react",
    "angular",
    "vue",
    "svelte",
    "next",
    # generic
    "web",
    "gateway",
    "balancer",
    "frontend",
    "ui",
)

CLASSIFICATION_RULES: tuple[KeywordRule, ...] = tuple(
    KeywordRule(keyword, Tier.DATA) for keyword in DATA_KEYWORDS
) + tuple(KeywordRule(keyword, Tier.FRONTEND) for keyword in FRONTEND_KEYWORDS)

# Explicit hints that bypass the keyword rules (matched upper-case).
TIER_HINTS: Mapping[str, Tier] = {"DATABASE": Tier.DATA}

TierBuckets = tuple[tuple[Node, ...], ...]

# ─── Classification ───────────────────────────────────────────────────────────


def classify(
    node: Node,
    rules: Iterable[KeywordRule] = CLASSIFICATION_RULES,
    hints: Mapping[str, Tier] = TIER_HINTS,
) -> Tier:
    """Return the tier for ``node``. Pure function of id, image and tier hint."""
    if node.tier_hint is not None:
        hinted = hints.get(node.tier_hint.upper())
        if hinted is not None:
            return hinted

    haystacks = (node.id.lower(), (node.image or "").lower())
    for rule in rules:
        keyword = rule.keyword.lower()
        if any(keyword in text for text in haystacks):
            return rule.tier
    return Tier.MIDDLE


def group_by_tier(
    nodes: Iterable[Node],
    classifier: Callable[[Node], Tier] = classify,
) -> TierBuckets:
    """Bucket nodes by tier, keeping input order inside each bucket.

    The result always has one entry per tier, indexed by ``Tier`` ordinal.
    """
    buckets: list[list[Node]] = [[] for _ in range(TIER_COUNT)]
    for node in nodes:
        buckets[classifier(node)].append(node)
    return tuple(tuple(bucket) for bucket in buckets)
