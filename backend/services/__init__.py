from .cache import MemoryStore, RedisStore, get_store, namespaced_key
from .availability import AvailabilityCalculator, AvailabilityVerdict, locate_last_working_day, is_wrapped_available
from .snapshot import SnapshotCache
from .wrapped import WrappedService, WrappedResolution
