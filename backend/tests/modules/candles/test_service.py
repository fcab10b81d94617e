"""Tests for candles service."""

import pytest
from datetime import timedelta
from unittest.mock import MagicMock

from modules.candles.service import CandleService
from modules.candles.models import (
    Candle,
    CandleStatus,
    CandleType,
    CreateCandleRequest,
    LocationInput,
    MapBounds,
    MapCandle,
)
from modules.candles.exceptions import (
    CandleNotFoundError,
    CandleAccessDeniedError,
    CandleNotActiveError,
)

from tests.conftest import NOW


def make_candle(
    candle_id: str = "candle-1",
    user_id: str = "user-1",
    status: CandleStatus = CandleStatus.ACTIVE,
    expires_in: timedelta = timedelta(hours=3),
    candle_type: CandleType = CandleType.CALM,
) -> Candle:
    return Candle(
        id=candle_id,
        title="For grandma",
        created_at=NOW - timedelta(hours=1),
        expires_at=NOW + expires_in,
        status=status,
        candle_type=candle_type,
        user_id=user_id,
        duration_hours=24,
    )


@pytest.fixture
def repo() -> MagicMock:
    return MagicMock()


@pytest.fixture
def service(repo) -> CandleService:
    return CandleService(repo, language="ru", map_limit=500, clock=lambda: NOW)


class TestToView:
    def test_active_candle(self, service):
        view = service.to_view(make_candle())

        assert view.effective_status == CandleStatus.ACTIVE
        assert view.status_label == "Активна"
        assert view.remaining_time == "Осталось ~3.0 ч"
        assert view.created_date == "15.01.25"
        assert view.type_meta.label == "Спокойствие"

    def test_expired_candle_keeps_stored_status(self, service):
        view = service.to_view(make_candle(expires_in=-timedelta(hours=1)))

        assert view.status == CandleStatus.ACTIVE
        assert view.effective_status == CandleStatus.EXPIRED
        assert view.status_label == "Погасла"
        assert view.remaining_time == "Скоро погаснет"

    def test_english_service(self, repo):
        service = CandleService(repo, language="en", clock=lambda: NOW)
        view = service.to_view(make_candle(status=CandleStatus.EXTINGUISHED))

        assert view.status_label == "Extinguished"


class TestCreateCandle:
    @pytest.mark.asyncio
    async def test_sets_expiry_from_duration(self, service, repo):
        repo.create_candle.return_value = make_candle(expires_in=timedelta(hours=168))

        request = CreateCandleRequest(title="  Hope  ", duration_hours=168)
        view = await service.create_candle("user-1", request)

        data = repo.create_candle.call_args[0][0]
        assert data["user_id"] == "user-1"
        assert data["title"] == "Hope"
        assert data["status"] == "active"
        assert data["expires_at"] == (NOW + timedelta(hours=168)).isoformat()
        assert data["location_type"] == "none"
        assert view.effective_status == CandleStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_city_location(self, service, repo):
        repo.create_candle.return_value = make_candle()

        request = CreateCandleRequest(
            title="Hope",
            location=LocationInput(latitude=55.75, longitude=37.61, country="Russia", city="Moscow"),
        )
        await service.create_candle("user-1", request)

        data = repo.create_candle.call_args[0][0]
        assert data["location_type"] == "city"
        assert data["location_city"] == "Moscow"
        assert data["location_show_on_map"] is True

    @pytest.mark.asyncio
    async def test_country_and_precise_locations(self, service, repo):
        repo.create_candle.return_value = make_candle()

        await service.create_candle(
            "user-1",
            CreateCandleRequest(title="A", location=LocationInput(latitude=1, longitude=2, country="Peru")),
        )
        assert repo.create_candle.call_args[0][0]["location_type"] == "country"

        await service.create_candle(
            "user-1",
            CreateCandleRequest(title="B", location=LocationInput(latitude=1, longitude=2)),
        )
        assert repo.create_candle.call_args[0][0]["location_type"] == "precise"


class TestGetCandle:
    @pytest.mark.asyncio
    async def test_not_found(self, service, repo):
        repo.get_by_id.return_value = None

        with pytest.raises(CandleNotFoundError):
            await service.get_candle("missing")

    @pytest.mark.asyncio
    async def test_found(self, service, repo):
        repo.get_by_id.return_value = make_candle()

        view = await service.get_candle("candle-1")
        assert view.id == "candle-1"


class TestListActive:
    @pytest.mark.asyncio
    async def test_pagination(self, service, repo):
        repo.list_active.return_value = ([make_candle()], 45)

        result = await service.list_active(page=2, page_size=20, candle_type=CandleType.CALM)

        repo.list_active.assert_called_once_with(NOW.isoformat(), 2, 20, CandleType.CALM)
        assert result.total == 45
        assert result.has_more is True
        assert len(result.candles) == 1

    @pytest.mark.asyncio
    async def test_last_page(self, service, repo):
        repo.list_active.return_value = ([], 40)

        result = await service.list_active(page=2, page_size=20)
        assert result.has_more is False


class TestExtinguishCandle:
    @pytest.mark.asyncio
    async def test_owner_extinguishes(self, service, repo):
        repo.get_by_id.return_value = make_candle()
        repo.extinguish.return_value = make_candle(
            status=CandleStatus.EXTINGUISHED, expires_in=timedelta(0)
        )

        view = await service.extinguish_candle("candle-1", "user-1")

        repo.extinguish.assert_called_once_with("candle-1", NOW.isoformat())
        assert view.effective_status == CandleStatus.EXTINGUISHED
        assert view.status_label == "Погашена вручную"

    @pytest.mark.asyncio
    async def test_not_owner(self, service, repo):
        repo.get_by_id.return_value = make_candle(user_id="someone-else")

        with pytest.raises(CandleAccessDeniedError):
            await service.extinguish_candle("candle-1", "user-1")
        repo.extinguish.assert_not_called()

    @pytest.mark.asyncio
    async def test_expired_candle(self, service, repo):
        repo.get_by_id.return_value = make_candle(expires_in=-timedelta(minutes=5))

        with pytest.raises(CandleNotActiveError):
            await service.extinguish_candle("candle-1", "user-1")

    @pytest.mark.asyncio
    async def test_already_extinguished(self, service, repo):
        repo.get_by_id.return_value = make_candle(status=CandleStatus.EXTINGUISHED)

        with pytest.raises(CandleNotActiveError):
            await service.extinguish_candle("candle-1", "user-1")

    @pytest.mark.asyncio
    async def test_missing(self, service, repo):
        repo.get_by_id.return_value = None

        with pytest.raises(CandleNotFoundError):
            await service.extinguish_candle("candle-1", "user-1")


class TestMyCandles:
    @pytest.mark.asyncio
    async def test_stats(self, service, repo):
        repo.list_for_user_since.return_value = [make_candle(), make_candle("candle-2")]
        repo.count_for_user.return_value = 10
        repo.count_active_for_user.return_value = 2
        repo.count_for_user_since.return_value = 4

        result = await service.get_my_candles("user-1")

        since = (NOW - timedelta(days=30)).isoformat()
        repo.list_for_user_since.assert_called_once_with("user-1", since)
        assert len(result.candles) == 2
        assert result.stats.total_candles == 10
        assert result.stats.active_candles == 2
        assert result.stats.candles_last_30_days == 4


class TestHomeStats:
    @pytest.mark.asyncio
    async def test_popular_type(self, service, repo):
        counts = {CandleType.CALM: 3, CandleType.MEMORY: 7, CandleType.FOCUS: 7}
        repo.count_by_type.side_effect = lambda t: counts.get(t, 0)
        repo.count_active.return_value = 12
        repo.count_created_since.return_value = 5

        stats = await service.get_home_stats()

        assert stats.active_count == 12
        assert stats.today_count == 5
        assert stats.popular_type.id == CandleType.MEMORY
        assert stats.popular_type.count == 7
        repo.count_created_since.assert_called_once_with("2025-01-15T00:00:00+00:00")

    @pytest.mark.asyncio
    async def test_no_candles(self, service, repo):
        repo.count_by_type.return_value = 0
        repo.count_active.return_value = 0
        repo.count_created_since.return_value = 0

        stats = await service.get_home_stats()
        assert stats.popular_type.id is None


class TestMap:
    @pytest.mark.asyncio
    async def test_map_candles_passes_filters(self, service, repo):
        marker = MapCandle(
            id="c1", title="t", lat=55.8, lng=37.6,
            created_at=NOW, expires_at=NOW + timedelta(hours=1), status=CandleStatus.ACTIVE,
        )
        repo.list_map_candles.return_value = [marker]
        bounds = MapBounds.parse("50,30,60,40")

        result = await service.get_map_candles(CandleType.MEMORY, active_only=False, bounds=bounds)

        repo.list_map_candles.assert_called_once_with(
            NOW.isoformat(),
            active_only=False,
            candle_type=CandleType.MEMORY,
            bounds=bounds,
            limit=500,
        )
        assert result == [marker]

    @pytest.mark.asyncio
    async def test_map_stats(self, service, repo):
        repo.list_map_countries.return_value = ["Russia", "Russia", "Peru"]
        repo.list_map_cities.return_value = [
            ("Moscow", "Russia"),
            ("Lima", "Peru"),
            ("Moscow", "Russia"),
        ]
        repo.count_map_candles.return_value = 3

        stats = await service.get_map_stats()

        assert stats.countries == {"Russia": 2, "Peru": 1}
        assert stats.top_cities[0].city == "Moscow"
        assert stats.top_cities[0].count == 2
        assert stats.total_candles == 3


class TestMapBounds:
    def test_parse(self):
        bounds = MapBounds.parse("1.5, 2, 3, 4")
        assert bounds.min_lat == 1.5
        assert bounds.max_lng == 4

    @pytest.mark.parametrize("raw", ["1,2,3", "a,b,c,d", ""])
    def test_parse_invalid(self, raw):
        with pytest.raises(ValueError):
            MapBounds.parse(raw)
