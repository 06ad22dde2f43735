import logging
import threading
import time

logger = logging.getLogger(__name__)


class PortalState:
    """
    State listing publik yang dulunya variabel global `articles`.

    Setiap refresh mendapat nomor generation. Hasil refresh hanya dipakai kalau
    belum ada generation yang lebih baru yang sudah diterapkan, jadi request
    lambat tidak menimpa snapshot yang lebih baru.
    """

    def __init__(self, refresh_interval: int = 30, clock=time.monotonic):
        self.refresh_interval = refresh_interval
        self._clock = clock
        self._lock = threading.Lock()
        self.reset()

    def reset(self):
        with self._lock:
            self.articles = []
            self.refreshed_at = None
            self._issued = 0
            self._applied = 0

    @property
    def generation(self) -> int:
        return self._applied

    def begin_refresh(self) -> int:
        with self._lock:
            self._issued += 1
            return self._issued

    def apply(self, generation: int, articles) -> bool:
        with self._lock:
            if generation <= self._applied:
                logger.debug("Refresh generation %s dibuang (sudah ada %s)", generation, self._applied)
                return False
            self._applied = generation
            self.articles = list(articles)
            self.refreshed_at = self._clock()
            return True

    def is_stale(self) -> bool:
        if self.refreshed_at is None:
            return True
        return self._clock() - self.refreshed_at >= self.refresh_interval

    def invalidate(self):
        """Dipanggil setelah penulis menyimpan/menghapus artikel."""
        with self._lock:
            # refresh yang sudah jalan sebelum penulis menyimpan membawa data lama
            self._applied = self._issued
            self.refreshed_at = None

    def refresh(self, article_service):
        generation = self.begin_refresh()
        articles = article_service.list_published()
        self.apply(generation, articles)
        return list(self.articles)

    def snapshot(self, article_service):
        if self.is_stale():
            return self.refresh(article_service)
        return list(self.articles)


def init_app(app):
    state = PortalState(refresh_interval=app.config.get("REFRESH_INTERVAL", 30))
    app.extensions["portal_state"] = state
    return state
