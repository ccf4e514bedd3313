"""
Users-and-posts sample application showcasing dataaccess.
"""

from .demo import bootstrap, count_posts_per_user, fetch_published_feed, run_demo, seed_sample_data
from .schema import CREATE_STATEMENTS, TABLES_DEFINITION

__all__ = [
    "CREATE_STATEMENTS",
    "TABLES_DEFINITION",
    "bootstrap",
    "count_posts_per_user",
    "fetch_published_feed",
    "run_demo",
    "seed_sample_data",
]
