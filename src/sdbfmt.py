#!/usr/bin/env python3
# encoding=utf-8

# SDB record encoder: DeviceRecord => one line of the database.

r"""
record:   IDENT16 NAME '\t' FAMILY entries
entries:  "" | entry (';' entry)*
entry:    KEYHEX2 EVHEX2 params
params:   ('a' INT)? ('i' INT)? ('s' REAL)? ('d' REAL)?
database: record ('\n' record)*

KEYHEX2, EVHEX2 are uppercase hex; raw device keys have bit 0x80 set.
"""

import math
from decimal import Decimal


RECORD_SEP = "\n"
ENTRY_SEP = ";"
NAME_SEP = "\t"

# Parameter attribute, prefix letter, renderer; emitted in this order.
PARAM_FIELDS = (
  ("max", "a", "int"),
  ("min", "i", "int"),
  ("scale", "s", "real"),
  ("deadzone", "d", "real"),
  )


def format_int (n):
  return "{:d}".format(n)

def format_real (x):
  """Shortest round-trip decimal, no exponent, no trailing '.0'.
>>> format_real(1.0)      # '1'
>>> format_real(0.25)     # '0.25'
>>> format_real(1e-7)     # '0.0000001'
"""
  if math.isnan(x):
    return "NaN"
  if math.isinf(x):
    return "inf" if x > 0 else "-inf"
  s = format(Decimal(repr(x)), "f")
  if "." in s:
    s = s.rstrip("0").rstrip(".")
  return s

_RENDER = {
  "int": format_int,
  "real": format_real,
  }


def format_code (code):
  return "{:02X}".format(code)


def encode_event (evspec):
  parts = [ format_code(evspec.event) ]
  for attr, prefix, kind in PARAM_FIELDS:
    v = getattr(evspec, attr, None)
    if v is not None:
      parts.append(prefix)
      parts.append(_RENDER[kind](v))
  return "".join(parts)

def encode_entry (entry):
  return format_code(entry.code) + encode_event(entry.evspec)


def sort_key (entry):
  return entry.key.lower()

def encode (record):
  """Encode one DeviceRecord as a database line (no trailing separator)."""
  head = "{}{}{}{}".format(record.ident, record.name, NAME_SEP, record.family)
  entries = sorted(record.remap, key=sort_key)
  return head + ENTRY_SEP.join(encode_entry(e) for e in entries)

def encode_database (records):
  return RECORD_SEP.join(encode(r) for r in records)
