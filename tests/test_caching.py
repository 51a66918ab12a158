"""Tests for Redis caching implementation."""

from unittest.mock import MagicMock

from app.core.redis_client import DOCTOR_LIST_PATTERN, CacheManager, doctor_key, doctor_list_key
from app.schemas.doctors import DoctorCreate
from app.services.doctor_service import DoctorService


def test_cache_manager_get_json():
    """Test CacheManager get_json method."""
    mock_redis = MagicMock()
    cache_manager = CacheManager(redis_client=mock_redis)

    # Test cache miss
    mock_redis.get.return_value = None
    assert cache_manager.get_json("test_key") is None
    mock_redis.get.assert_called_once_with("test_key")

    # Test cache hit
    mock_redis.reset_mock()
    mock_redis.get.return_value = '{"name": "Test", "value": 123}'
    assert cache_manager.get_json("test_key") == {"name": "Test", "value": 123}


def test_cache_manager_set_json():
    """Test CacheManager set_json method."""
    mock_redis = MagicMock()
    cache_manager = CacheManager(redis_client=mock_redis)

    assert cache_manager.set_json("test_key", {"name": "Test"}) is True
    mock_redis.set.assert_called_once()

    mock_redis.reset_mock()
    assert cache_manager.set_json("test_key", {"name": "Test"}, ttl=300) is True
    mock_redis.setex.assert_called_once()


def test_cache_manager_degrades_on_redis_errors():
    """Redis outages read as cache misses."""
    mock_redis = MagicMock()
    mock_redis.get.side_effect = ConnectionError("down")
    mock_redis.setex.side_effect = ConnectionError("down")
    mock_redis.scan_iter.side_effect = ConnectionError("down")
    cache_manager = CacheManager(redis_client=mock_redis)

    assert cache_manager.get_json("key") is None
    assert cache_manager.set_json("key", {"a": 1}, ttl=10) is False
    assert cache_manager.delete_pattern("doctor:list:*") == 0


def test_cache_manager_delete_pattern():
    """Test CacheManager delete_pattern method."""
    mock_redis = MagicMock()
    cache_manager = CacheManager(redis_client=mock_redis)

    mock_redis.scan_iter.return_value = iter([
        "doctor:list:all:1:20",
        "doctor:list:all:2:20",
        "doctor:list:Orthodontics:1:20",
    ])
    mock_redis.delete.return_value = 3

    assert cache_manager.delete_pattern("doctor:list:*") == 3
    mock_redis.scan_iter.assert_called_once_with(match="doctor:list:*")


async def test_doctor_list_served_from_cache(db_session):
    """A cached public page is returned without touching the database."""
    cache = MagicMock(spec=CacheManager)
    cache.get_json.return_value = {"items": [{"id": 1, "name": "Cached"}], "total": 1}
    service = DoctorService(cache_manager=cache)

    items, total = await service.get_doctors(db_session, page=1, limit=20)

    assert items == [{"id": 1, "name": "Cached"}]
    assert total == 1
    cache.get_json.assert_called_once_with("doctor:list:all:1:20")
    cache.set_json.assert_not_called()


async def test_doctor_list_cache_miss_is_stored(db_session):
    cache = MagicMock(spec=CacheManager)
    cache.get_json.return_value = None
    service = DoctorService(cache_manager=cache)

    items, total = await service.get_doctors(db_session, page=1, limit=20)

    assert (items, total) == ([], 0)
    cache.set_json.assert_called_once_with(
        "doctor:list:all:1:20", {"items": [], "total": 0}, ttl=DoctorService.DOCTOR_LIST_CACHE_TTL
    )


async def test_admin_listing_bypasses_cache(db_session):
    cache = MagicMock(spec=CacheManager)
    service = DoctorService(cache_manager=cache)

    await service.get_doctors(db_session, is_active=None)

    cache.get_json.assert_not_called()
    cache.set_json.assert_not_called()


async def test_writes_invalidate_doctor_caches(db_session):
    cache = MagicMock(spec=CacheManager)
    cache.get_json.return_value = None
    service = DoctorService(cache_manager=cache)

    doctor = await service.create_doctor(
        db_session, DoctorCreate(name="Ayşe", surname="Yılmaz", specialty="Orthodontics")
    )
    cache.delete_pattern.assert_called_with("doctor:list:*")

    cache.reset_mock()
    cache.get_json.return_value = None
    await service.toggle_status(db_session, doctor["id"])

    cache.delete.assert_called_with(f"doctor:{doctor['id']}")
    cache.delete_pattern.assert_called_with("doctor:list:*")


def test_doctor_cache_keys():
    assert doctor_key(7) == "doctor:7"
    assert doctor_list_key(None, 1, 20) == "doctor:list:all:1:20"
    assert doctor_list_key("Orthodontics", 2, 10) == "doctor:list:Orthodontics:2:10"


def test_cache_manager_delete_pattern_without_matches():
    mock_redis = MagicMock()
    mock_redis.scan_iter.return_value = iter([])
    cache_manager = CacheManager(redis_client=mock_redis)

    assert cache_manager.delete_pattern(DOCTOR_LIST_PATTERN) == 0
    mock_redis.delete.assert_not_called()
