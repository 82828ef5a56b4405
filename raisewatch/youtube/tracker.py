from raisewatch.core.counts import LikeCount, SubscriberCount, TrackedCount


class CountTracker:
    """Best-so-far value for a single video or channel."""

    def __init__(self, seed: TrackedCount):
        self._best = self._seed(seed)

    def _seed(self, seed: TrackedCount) -> TrackedCount:
        return seed

    def update(self, candidate: TrackedCount) -> bool:
        # raises IdentityMismatchError when candidate belongs to another entity
        if self._best.check(candidate):
            self._best = candidate
            return True
        return False

    def current(self) -> TrackedCount:
        return self._best


class LikeCountTracker(CountTracker):
    """Like counts always start from zero.

    The viewer may already have liked the stream when tracking starts, so the
    first real sample has to register as a rise. Only the id and title of the
    seed are kept.
    """

    def _seed(self, seed: LikeCount) -> LikeCount:
        return LikeCount(seed.video_id, seed.video_title, 0)


class SubscriberCountTracker(CountTracker):
    def _seed(self, seed: SubscriberCount) -> SubscriberCount:
        return seed
