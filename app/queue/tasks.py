"""
Celery tasks - keep the posts index in step with the content store.
Enqueued by scripts/reindex_posts.py: published posts are indexed, the rest removed.
"""

import logging

from app.queue.celery_app import celery_app
from app.search.elasticsearch_client import (
    ensure_posts_index_sync,
    index_post_sync,
    remove_post_sync,
    sync_es_client,
)

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, max_retries=3)
def index_post_task(self, post_doc: dict):
    """
    Index one published post document (see post_to_doc).
    Retries with a short countdown when Elasticsearch is unavailable.
    """
    es = sync_es_client()
    try:
        ensure_posts_index_sync(es)
        index_post_sync(post_doc, es)
    except Exception as exc:
        logger.warning("index_post_task failed for post %s: %s", post_doc.get("id"), exc)
        raise self.retry(exc=exc, countdown=5)
    finally:
        es.close()


@celery_app.task(bind=True, max_retries=3)
def remove_post_task(self, post_id: int):
    """Drop a post that is no longer published (draft, private, trashed)."""
    es = sync_es_client()
    try:
        remove_post_sync(post_id, es)
    except Exception as exc:
        logger.warning("remove_post_task failed for post %s: %s", post_id, exc)
        raise self.retry(exc=exc, countdown=5)
    finally:
        es.close()
