############################################################
#
# blogcms - Blog and Content Management Service
#
# metrics.py: Prometheus metric definitions
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Prometheus metrics shared by the core and the /metrics endpoint."""

from prometheus_client import Counter, Gauge

CONTENT_MUTATIONS = Counter(
    "blogcms_content_mutations_total",
    "Post and page mutations",
    ["kind", "action"],  # kind: post|page, action: create|update|delete|publish|unpublish
)
SLUG_CONFLICTS = Counter(
    "blogcms_slug_conflicts_total",
    "Slug writes rejected by the unique constraint and retried",
    ["kind"],
)
COMMENT_ACTIONS = Counter(
    "blogcms_comment_actions_total",
    "Comment creation and moderation actions",
    ["action"],  # create, approve, unapprove, delete
)
CONTENT_ITEMS = Gauge(
    "blogcms_content_items",
    "Number of stored posts and pages",
    ["kind"],
)
