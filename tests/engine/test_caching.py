from __future__ import annotations

from weld_quoter.engine.caching import fingerprint, memoize
from weld_quoter.engine.pipeline import WeldRequest, calculate_weld
from weld_quoter.engine.settings import WeldSettings
from weld_quoter.engine.types import GeometryInput, JointProfile, Linear, Process


def _request(thickness: float) -> WeldRequest:
    return WeldRequest(
        geometry=GeometryInput(
            thickness=thickness,
            profile=JointProfile.DOUBLE_VEE,
            length=Linear(1000.0),
            root_gap=3.0,
            root_face=2.0,
            inside_angle=30.0,
            outside_angle=30.0,
            split_ratio=60.0,
        ),
        outside_process=Process.SAW,
    )


def test_fingerprint_is_stable_and_input_sensitive() -> None:
    assert fingerprint(_request(20.0)) == fingerprint(_request(20.0))
    assert fingerprint(_request(20.0)) != fingerprint(_request(21.0))


def test_memoize_returns_cached_result(settings: WeldSettings) -> None:
    calls: list[float] = []

    @memoize(maxsize=2)
    def cached(request: WeldRequest, bundle: WeldSettings):
        calls.append(request.geometry.thickness)
        return calculate_weld(request, bundle)

    first = cached(_request(20.0), settings)
    second = cached(_request(20.0), settings)

    assert first is second
    assert calls == [20.0]

    cached(_request(25.0), settings)
    cached(_request(30.0), settings)
    assert cached.cache_size() == 2

    cached(_request(20.0), settings)
    assert calls == [20.0, 25.0, 30.0, 20.0]

    cached.cache_clear()
    assert cached.cache_size() == 0


def test_memoize_without_arguments() -> None:
    counter = {"n": 0}

    @memoize
    def double(value: int) -> int:
        counter["n"] += 1
        return value * 2

    assert double(4) == 8
    assert double(4) == 8
    assert counter["n"] == 1
