import unittest

from slot_engine.domain.entities.symbol_catalog import SymbolCatalog, default_catalog
from slot_engine.domain.entities.symbols import Multiplier, Symbol, SymbolConfig
from slot_engine.domain.exceptions import ConfigurationError, UnknownSymbolError


def make_config(symbol, weight, three=5, **kwargs):
    return SymbolConfig(symbol, weight, Multiplier(three=three), **kwargs)


class TestSymbol(unittest.TestCase):

    def test_parse_by_name_and_glyph(self):
        self.assertEqual(Symbol.parse("fuel"), Symbol.FUEL)
        self.assertEqual(Symbol.parse(Symbol.FIRE.glyph), Symbol.FIRE)
        self.assertIs(Symbol.parse(Symbol.CAR), Symbol.CAR)

    def test_parse_unknown_raises_value_error(self):
        with self.assertRaises(ValueError):
            Symbol.parse("cherry")

    def test_multiplier_tiers(self):
        multiplier = Multiplier(three=5, four=15, five=50)
        self.assertEqual(multiplier.for_run(2), 0)
        self.assertEqual(multiplier.for_run(3), 5)
        self.assertEqual(multiplier.for_run(4), 15)
        self.assertEqual(multiplier.for_run(7), 50)

    def test_symbol_config_from_dict_accepts_flat_multiplier(self):
        config = SymbolConfig.from_dict({"symbol": "BELL", "weight": 4, "multiplier": 12})
        self.assertEqual(config.symbol, Symbol.BELL)
        self.assertEqual(config.base_weight, 4.0)
        self.assertEqual(config.multiplier, Multiplier(three=12))


class TestSymbolCatalog(unittest.TestCase):

    def setUp(self):
        self.catalog = default_catalog()

    def test_default_catalog_is_declared_rarest_first(self):
        self.assertEqual(
            self.catalog.symbols,
            [Symbol.FUEL, Symbol.CAR, Symbol.BELL, Symbol.AXE, Symbol.BOMB, Symbol.FIRE]
        )
        self.assertEqual(self.catalog.jackpot_symbol, Symbol.FUEL)
        self.assertEqual(self.catalog.max_credit_multiplier, 10)

    def test_fallback_is_heaviest_symbol(self):
        self.assertEqual(self.catalog.fallback_symbol, Symbol.FIRE)

    def test_fallback_prefers_later_entry_on_tie(self):
        catalog = SymbolCatalog([
            make_config(Symbol.FUEL, 1), make_config(Symbol.BOMB, 4), make_config(Symbol.FIRE, 4)
        ])
        self.assertEqual(catalog.fallback_symbol, Symbol.FIRE)

    def test_base_probabilities_sum_to_one(self):
        probabilities = self.catalog.base_probabilities()
        self.assertAlmostEqual(sum(probabilities.values()), 1.0)
        self.assertAlmostEqual(probabilities[Symbol.FUEL], 0.02)

    def test_config_for_unknown_symbol_raises(self):
        catalog = SymbolCatalog([make_config(Symbol.FUEL, 1), make_config(Symbol.FIRE, 2)])
        with self.assertRaises(UnknownSymbolError):
            catalog.config_for(Symbol.CAR)
        self.assertIsNone(catalog.get(Symbol.CAR))

    def test_duplicate_symbol_rejected(self):
        with self.assertRaises(ConfigurationError):
            SymbolCatalog([make_config(Symbol.FUEL, 1), make_config(Symbol.FUEL, 2)])

    def test_negative_values_rejected(self):
        with self.assertRaises(ConfigurationError):
            SymbolCatalog([make_config(Symbol.FUEL, -1), make_config(Symbol.FIRE, 2)])
        with self.assertRaises(ConfigurationError):
            SymbolCatalog([make_config(Symbol.FUEL, 1, consolation_prize=-3)])

    def test_missing_jackpot_symbol_rejected(self):
        with self.assertRaises(UnknownSymbolError):
            SymbolCatalog([make_config(Symbol.FIRE, 1)])

    def test_all_zero_weights_rejected(self):
        with self.assertRaises(ConfigurationError):
            SymbolCatalog([make_config(Symbol.FUEL, 0), make_config(Symbol.FIRE, 0)])

    def test_from_dict(self):
        catalog = SymbolCatalog.from_dict({
            "symbols": [
                {"symbol": "FIRE", "weight": 5, "multiplier": {"three": 4, "four": 8}},
                {"symbol": "FUEL", "weight": 1, "multiplier": 40, "jackpot_multiplier": 40},
            ],
            "jackpot_symbol": "FUEL",
            "max_credit_multiplier": 5,
        })
        self.assertEqual(catalog.symbols, [Symbol.FIRE, Symbol.FUEL])
        self.assertEqual(catalog.config_for(Symbol.FIRE).multiplier.four, 8)
        self.assertEqual(catalog.max_credit_multiplier, 5)

    def test_from_dict_unknown_symbol(self):
        with self.assertRaises(ConfigurationError):
            SymbolCatalog.from_dict({"symbols": [{"symbol": "CHERRY", "weight": 1}]})


if __name__ == '__main__':
    unittest.main()
