"""Tests for pm_common.address: deterministic content-derived addresses."""

from src.pm_common.address import derive_address, derive_factory_address, derive_market_address

FACTORY = derive_factory_address("test")


def _market(market_id: int = 0, question: str = "Q?") -> str:
    return derive_market_address(FACTORY, market_id, question, "", 1_750_000_000, "0:oracle", 200)


class TestDeriveAddress:
    def test_format(self) -> None:
        address = derive_address("market", [1])
        assert address.startswith("0:")
        assert len(address) == 2 + 64

    def test_deterministic(self) -> None:
        assert _market() == _market()

    def test_id_changes_address(self) -> None:
        assert _market(0) != _market(1)

    def test_params_change_address(self) -> None:
        assert _market(question="A?") != _market(question="B?")

    def test_kind_is_part_of_identity(self) -> None:
        assert derive_address("market", ["x"]) != derive_address("factory", ["x"])

    def test_parts_are_separated(self) -> None:
        assert derive_address("k", ["ab", "c"]) != derive_address("k", ["a", "bc"])

    def test_factory_salt(self) -> None:
        assert derive_factory_address("a") != derive_factory_address("b")
        assert FACTORY != _market()
