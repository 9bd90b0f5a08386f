"""Object storage for uploaded verification documents"""
import logging
import os
import uuid

from django.core.files.storage import default_storage

logger = logging.getLogger(__name__)


class StorageService:
    """Thin put/delete wrapper over a Django storage backend"""

    def __init__(self, storage=None):
        self.storage = storage or default_storage

    def put(self, directory, uploaded_file):
        """Store a file under a unique key and return (key, url)"""
        _, ext = os.path.splitext(uploaded_file.name)
        key = f'{directory}/{uuid.uuid4().hex}{ext.lower()}'
        saved_key = self.storage.save(key, uploaded_file)
        logger.info(f'[STORAGE] Stored {uploaded_file.name} as {saved_key}')
        return saved_key, self.storage.url(saved_key)

    def delete(self, key):
        try:
            self.storage.delete(key)
            logger.info(f'[STORAGE] Removed {key}')
        except Exception as e:
            logger.error(f'[STORAGE] Could not remove {key}: {e}')
