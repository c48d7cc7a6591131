#!/usr/bin/env python3

import unittest

import sdbsym
from sdbsym import UnknownSymbol


class TestSymbols (unittest.TestCase):
  def test_resolve (self):
    self.assertEqual(sdbsym.resolve("None"), 0x00)
    self.assertEqual(sdbsym.resolve("ActionA"), 0x02)
    self.assertEqual(sdbsym.resolve("ActionB"), 0x03)
    self.assertEqual(sdbsym.resolve("JoyX"), 0x20)
    self.assertEqual(sdbsym.resolve("MicPush"), 0x2F)
    self.assertEqual(sdbsym.resolve("Mouse"), 0x50)
    self.assertEqual(sdbsym.resolve("PaddleLeft"), 0x51)
    self.assertEqual(sdbsym.resolve("TrimRight"), 0x5D)

  def test_table (self):
    self.assertEqual(len(sdbsym.SYMBOLS), 0x5E)
    codes = list(sdbsym.SYMBOLS.values())
    self.assertEqual(codes, list(range(0x5E)))
    self.assertEqual(len(set(sdbsym.SYMBOLS)), 0x5E)

  def test_hexcode (self):
    self.assertEqual(sdbsym.hexcode("MenuL"), "08")
    self.assertEqual(sdbsym.hexcode("Joy"), "0A")
    self.assertEqual(sdbsym.hexcode("RadarAltimeter"), "49")
    # Two digits past 0x50 too.
    self.assertEqual(sdbsym.hexcode("Context"), "55")
    self.assertEqual(sdbsym.hexcode("TrimUp"), "5A")

  def test_unknown (self):
    self.assertRaises(UnknownSymbol, sdbsym.resolve, "actiona")
    self.assertRaises(UnknownSymbol, sdbsym.resolve, "ActionZ")
    self.assertRaises(UnknownSymbol, sdbsym.resolve, "")
    self.assertRaises(UnknownSymbol, sdbsym.resolve, ["ActionA"])
    with self.assertRaises(UnknownSymbol) as ctx:
      sdbsym.hexcode("Jump")
    self.assertEqual(ctx.exception.value, "Jump")
    self.assertIn("Jump", str(ctx.exception))

  def test_name_of (self):
    self.assertEqual(sdbsym.name_of(0x0F), "TriggerR")
    self.assertEqual(sdbsym.name_of(0x5C), "TrimLeft")
    self.assertRaises(UnknownSymbol, sdbsym.name_of, 0x5E)

  def test_error_path (self):
    err = UnknownSymbol("Jump")
    self.assertEqual(str(err), "Unknown symbol: 'Jump'")
    err.path = "sdb/linux/0000000000000001pad.toml"
    self.assertEqual(str(err), "sdb/linux/0000000000000001pad.toml: Unknown symbol: 'Jump'")


if __name__ == "__main__":
  unittest.main()
