"""Tests for the spin engine cooldown state machine."""

import pytest

from conftest import EXEMPT_DNI, T0, insert_prizes
from core import SpinDefaults, SpinState
from core.exceptions import CatalogEmptyError, NotFoundError, RateLimitError, ValidationError
from database.models import SpinRecord
from database.repositories import PrizeRepository, SpinRepository
from services.spin_engine import SpinEngine, classify
from utils.validators import validate_dni

HOUR = 3_600_000
DNI = "12345678"


@pytest.fixture
def engine(config_service, clock):
    # Draw 0.0 always lands in the first positive-weight bucket
    return SpinEngine(config_service, cooldown_hours=24, clock=clock, rand=lambda: 0.0)


def _record(next_available_at: int) -> SpinRecord:
    return SpinRecord(
        dni=DNI,
        last_spin_at=T0,
        next_available_at=next_available_at,
        last_prize_id="p1",
        last_prize_name="Sticker gratis",
        last_prize_image="",
    )


def test_classify_states():
    assert classify(None, exempt=False, now=T0) is SpinState.NEVER_SPUN
    assert classify(_record(T0 + HOUR), exempt=False, now=T0) is SpinState.COOLING_DOWN
    assert classify(_record(T0), exempt=False, now=T0) is SpinState.ELIGIBLE
    assert classify(_record(T0 - 1), exempt=False, now=T0) is SpinState.ELIGIBLE
    assert classify(_record(T0 + 10 * HOUR), exempt=True, now=T0) is SpinState.ELIGIBLE


def test_only_cooling_down_blocks_a_spin():
    assert SpinState.NEVER_SPUN.can_spin
    assert SpinState.ELIGIBLE.can_spin
    assert not SpinState.COOLING_DOWN.can_spin


@pytest.mark.parametrize(
    "retry_in_ms, hours, minutes",
    [
        (23 * HOUR, 23, 0),
        (HOUR + 30 * 60_000, 1, 30),
        (30 * 60_000 + 1, 0, 31),
        (59_999, 0, 1),
    ],
)
def test_rate_limit_wait_breakdown(retry_in_ms, hours, minutes):
    error = RateLimitError(retry_in_ms)
    assert (error.hours, error.minutes) == (hours, minutes)
    assert error.to_dict() == {
        "error": f"Este DNI ya giró. Faltan {hours}h {minutes}m para volver a tirar.",
        "retryInMs": retry_in_ms,
    }
    assert error.status_code == 429


@pytest.mark.asyncio
async def test_first_spin_starts_cooldown_and_second_is_rate_limited(engine, clock):
    await insert_prizes([("10% de descuento", 30), ("Sticker gratis", 25)])

    result = await engine.spin(DNI)
    assert result.redirect == f"/premio/{DNI}"
    assert result.next_available_at == T0 + 24 * HOUR

    record = await SpinRepository.get(DNI)
    assert record.last_spin_at == T0
    assert record.next_available_at == T0 + 24 * HOUR
    assert await engine.state(DNI) is SpinState.COOLING_DOWN

    clock.advance(hours=1)
    with pytest.raises(RateLimitError) as excinfo:
        await engine.spin(DNI)
    assert excinfo.value.retry_in_ms == 23 * HOUR
    assert excinfo.value.hours == 23


@pytest.mark.asyncio
async def test_spin_allowed_again_once_cooldown_expires(engine, clock):
    await insert_prizes([("Gorra de regalo", 5)])
    await engine.spin(DNI)

    clock.advance(hours=24)
    assert await engine.state(DNI) is SpinState.ELIGIBLE
    result = await engine.spin(DNI)
    assert result.next_available_at == T0 + 48 * HOUR


@pytest.mark.asyncio
async def test_exempt_dni_always_spins_without_cooldown(engine, clock):
    await insert_prizes([("2x1 en remeras", 10)])

    for step in range(4):
        result = await engine.spin(EXEMPT_DNI)
        record = await SpinRepository.get(EXEMPT_DNI)
        assert result.next_available_at == clock.now
        assert record.next_available_at == clock.now
        assert record.last_spin_at == clock.now
        assert await engine.state(EXEMPT_DNI) is SpinState.ELIGIBLE
        clock.advance(minutes=step)


@pytest.mark.asyncio
async def test_exemption_overrides_a_stored_future_cooldown(engine):
    await insert_prizes([("Sticker gratis", 25)])
    await SpinRepository.upsert(SpinRecord(
        dni=EXEMPT_DNI,
        last_spin_at=T0,
        next_available_at=T0 + 100 * HOUR,
        last_prize_id=None,
        last_prize_name="old",
        last_prize_image="",
    ))
    result = await engine.spin(EXEMPT_DNI)
    assert result.prize.name == "Sticker gratis"


@pytest.mark.asyncio
async def test_exemption_list_follows_config_updates(engine, config_service, clock):
    await insert_prizes([("Sticker gratis", 25)])
    await engine.spin(DNI)

    await config_service.update({"exemptDnis": [DNI]})
    clock.advance(minutes=5)
    result = await engine.spin(DNI)
    assert result.next_available_at == clock.now


@pytest.mark.asyncio
@pytest.mark.parametrize("dni", ["1234567", "123456789", "1234567a", " 12345678", "12345678\n", "", None, 12345678])
async def test_invalid_dni_is_rejected(engine, dni):
    with pytest.raises(ValidationError):
        await engine.spin(dni)


@pytest.mark.asyncio
async def test_empty_catalog_raises(engine):
    with pytest.raises(CatalogEmptyError):
        await engine.spin(DNI)
    assert await SpinRepository.get(DNI) is None


@pytest.mark.asyncio
async def test_all_zero_weights_always_give_first_prize(config_service, clock):
    await insert_prizes([("Primero", 0), ("Segundo", 0), ("Tercero", 0)])
    engine = SpinEngine(config_service, clock=clock)

    for _ in range(5):
        result = await engine.spin(EXEMPT_DNI)
        assert result.prize.name == "Primero"


@pytest.mark.asyncio
async def test_weighted_draw_uses_injected_random_source(config_service, clock):
    await insert_prizes([("a", 30), ("b", 10), ("c", 25), ("d", 5), ("e", 30)])
    engine = SpinEngine(config_service, clock=clock, rand=lambda: 0.32)
    result = await engine.spin(DNI)
    assert result.prize.name == "b"


@pytest.mark.asyncio
async def test_last_prize_snapshot_survives_catalog_changes(engine):
    prizes = await insert_prizes([("Gorra de regalo", 5)])
    await engine.spin(DNI)

    await PrizeRepository.update(prizes[0].id, {"name": "Gorra azul", "image": ""})
    info = await engine.last_prize(DNI)
    assert info["prizeName"] == "Gorra de regalo"
    assert info["prizeImage"] == "https://img.example/0.png"

    await PrizeRepository.delete(prizes[0].id)
    info = await engine.last_prize(DNI)
    assert info == {
        "businessName": "Tu Negocio",
        "instagramQrUrl": "",
        "dni": DNI,
        "prizeName": "Gorra de regalo",
        "prizeImage": "https://img.example/0.png",
    }


@pytest.mark.asyncio
async def test_later_spin_overwrites_the_single_record(config_service, clock):
    await insert_prizes([("a", 1), ("b", 1)])
    first = SpinEngine(config_service, clock=clock, rand=lambda: 0.0)
    second = SpinEngine(config_service, clock=clock, rand=lambda: 0.99)

    await first.spin(EXEMPT_DNI)
    clock.advance(minutes=1)
    await second.spin(EXEMPT_DNI)

    record = await SpinRepository.get(EXEMPT_DNI)
    assert record.last_prize_name == "b"
    assert record.last_spin_at == clock.now


@pytest.mark.asyncio
async def test_last_prize_errors(engine):
    with pytest.raises(ValidationError):
        await engine.last_prize("abc")
    with pytest.raises(NotFoundError):
        await engine.last_prize(DNI)


def test_dni_length_follows_configured_constant():
    assert validate_dni("7" * SpinDefaults.DNI_LENGTH)
    assert not validate_dni("7" * (SpinDefaults.DNI_LENGTH - 1))
    assert not validate_dni("7" * (SpinDefaults.DNI_LENGTH + 1))
