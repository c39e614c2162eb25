import threading


class CrawlBudget:
    """
    Run-wide result budget and seen-links set.

    All reads and writes go through the lock, and the counter is only ever
    moved by increment-and-check operations, so ``saved`` cannot pass
    ``results_wanted`` no matter how many callbacks race for the last slots.
    ``results_wanted=None`` means unbounded.
    """

    def __init__(self, results_wanted=None, max_pages=999):
        self.results_wanted = results_wanted
        self.max_pages = max_pages
        self._saved = 0
        self._seen = set()
        self._recorded = set()
        self._lock = threading.Lock()

    @property
    def saved(self):
        with self._lock:
            return self._saved

    @property
    def exhausted(self):
        with self._lock:
            return self._exhausted()

    def remaining(self):
        """Slots left, or None when unbounded."""
        with self._lock:
            if self.results_wanted is None:
                return None
            return max(0, self.results_wanted - self._saved)

    def claim_links(self, urls, limit=None):
        """Mark up to ``limit`` not-yet-seen urls as seen and return them in order."""
        claimed = []
        with self._lock:
            for url in urls:
                if limit is not None and len(claimed) >= limit:
                    break
                if url in self._seen:
                    continue
                self._seen.add(url)
                claimed.append(url)
        return claimed

    def reserve(self, count):
        """Take up to ``count`` slots at once and return how many were granted."""
        with self._lock:
            granted = count
            if self.results_wanted is not None:
                granted = max(0, min(count, self.results_wanted - self._saved))
            self._saved += granted
            return granted

    def try_record(self, url):
        """Take one slot for ``url``; False if the budget is spent or the url was already recorded."""
        with self._lock:
            if self._exhausted() or url in self._recorded:
                return False
            self._recorded.add(url)
            self._saved += 1
            return True

    def _exhausted(self):
        return self.results_wanted is not None and self._saved >= self.results_wanted
