from supabase import create_client
from dotenv import load_dotenv
import os
import logging
from contextlib import contextmanager

logger = logging.getLogger(__name__)

load_dotenv()


class SupabaseConfigError(RuntimeError):
    """SUPABASE_URL / SUPABASE_SERVICE_KEY are missing."""


# --- Supabase Client Logic ---
_supabase_client_instance = None


class SupabaseClient:
    def __init__(self):
        self._client = None
        # Defer initialization to first access

    def _get_or_init_client(self):
        if self._client is None:
            supabase_url = os.getenv('SUPABASE_URL')
            supabase_key = os.getenv('SUPABASE_SERVICE_KEY')

            if not supabase_url or not supabase_key:
                raise SupabaseConfigError("SUPABASE_URL or SUPABASE_SERVICE_KEY not found")

            try:
                logger.info("Initializing Supabase client...")
                self._client = create_client(supabase_url, supabase_key)
                logger.info("Successfully initialized Supabase client")
            except Exception as e:
                logger.error(f"Error initializing Supabase client: {str(e)}")
                self._client = None
                raise
        return self._client

    @property
    def client(self):
        """Get the Supabase client, initializing if needed."""
        return self._get_or_init_client()

    @contextmanager
    def db_connection(self):
        """Context manager for Supabase client usage"""
        try:
            yield self.client  # Accessing .client ensures initialization
        except Exception as e:
            logger.error(f"Error in Supabase client operation: {str(e)}")
            raise


def _get_supabase_instance():
    global _supabase_client_instance
    if _supabase_client_instance is None:
        _supabase_client_instance = SupabaseClient()
    return _supabase_client_instance


def get_supabase():
    """Get the Supabase client API instance."""
    return _get_supabase_instance().client


def is_configured():
    return bool(os.getenv('SUPABASE_URL') and os.getenv('SUPABASE_SERVICE_KEY'))


@contextmanager
def get_db():
    """Context manager for Supabase client operations (profiles, progress, notes)."""
    instance = _get_supabase_instance()
    with instance.db_connection() as client:
        yield client
