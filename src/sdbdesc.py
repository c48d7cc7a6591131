#!/usr/bin/env python3
# encoding=utf-8

# Descriptor model: one controller mapping file => DeviceRecord.

r"""
Descriptor (TOML shown; YAML carries the same tree):

  name = "Display Name"
  type = "xbox" | "playstation" | "nintendo" | "flight"

  [remap]
  <srckey> = "<evname>"
  <srckey> = { event = "<evname>", max = INT, min = INT, scale = FLOAT, deadzone = FLOAT }

srckey:
  evname : logical name from the symbol table, e.g. "ActionA", "JoyX"
  DIGITS : raw device code 0..255 (leading '+' and zeros allowed)

Table values may omit any field; a missing 'event' means "None".
Other top-level fields are ignored.
"""

import os
import re
import tomllib
import yaml

import sdbsym
from sdbsym import SdbError


IDENT_LEN = 16

FAMILIES = {
  "xbox": "x",
  "playstation": "p",
  "nintendo": "n",
  "flight": "f",
  }

# Bit flagging a raw device code, as opposed to a logical code.
RAW_FLAG = 0x80



##########
# Errors #
##########

class UnknownDeviceType (SdbError):
  def _describe (self):
    return "Unknown type: {!r}".format(self.value)

class InvalidMapping (SdbError):
  """Remap value is neither a string nor a table, or a parameter has the wrong type."""
  def _describe (self):
    return "invalid mapping: {!r}".format(self.value)

class MalformedDescriptor (SdbError):
  def _describe (self):
    return "malformed descriptor: {}".format(self.value)

class SdbIoError (SdbError):
  def _describe (self):
    return "I/O error: {}".format(self.value)



def _stringlike (x):
  return isinstance(x, str)

def _dictlike (x):
  try: x.items
  except AttributeError: return False
  else: return True

def _intlike (x):
  return isinstance(x, int) and not isinstance(x, bool)

def _floatlike (x):
  return isinstance(x, float)



##########
# Models #
##########

class EventSpec (object):
  """Logical event a source key is mapped onto."""
  def __init__ (self, event):
    self.event = event    # logical code, int.

  def __eq__ (self, other):
    return type(self) is type(other) and vars(self) == vars(other)


class SimpleEvent (EventSpec):
  def __repr__ (self):
    return "{}({!r})".format(self.__class__.__name__, sdbsym.name_of(self.event))


class ParamEvent (EventSpec):
  """Event with optional transform parameters; None means absent."""
  PARAMS = ("max", "min", "scale", "deadzone")

  def __init__ (self, event, max=None, min=None, scale=None, deadzone=None):
    EventSpec.__init__(self, event)
    self.max = max
    self.min = min
    self.scale = scale
    self.deadzone = deadzone

  def __repr__ (self):
    parts = [ "{!r}".format(sdbsym.name_of(self.event)) ]
    for k in self.PARAMS:
      v = getattr(self, k)
      if v is not None:
        parts.append("{}={!r}".format(k, v))
    return "{}({})".format(self.__class__.__name__, ", ".join(parts))


class RemapEntry (object):
  def __init__ (self, key, code, evspec):
    self.key = key        # source key as written, str.
    self.code = code      # encoded source byte.
    self.evspec = evspec  # EventSpec instance.

  def __repr__ (self):
    return "{}(key={!r}, code=0x{:02X}, evspec={!r})".format(
      self.__class__.__name__,
      self.key,
      self.code,
      self.evspec)


class DeviceRecord (object):
  def __init__ (self, ident, name, family, remap=None):
    self.ident = ident    # 16 characters.
    self.name = name
    self.family = family  # one of FAMILIES.values()
    self.remap = list(remap) if remap else []   # RemapEntry, document order.

  def __repr__ (self):
    return "{}(ident={!r}, name={!r}, family={!r}, remap={!r})".format(
      self.__class__.__name__,
      self.ident,
      self.name,
      self.family,
      self.remap)



###########
# Parsing #
###########

_NUMERIC = re.compile(r"\+?[0-9]+\Z")

def parse_key (key):
  """Encoded source byte for remap key 'key'."""
  if _NUMERIC.match(key):
    number = int(key)
    if number <= 0xFF:
      return number | RAW_FLAG
  return sdbsym.resolve(key)


def parse_event (value):
  """Build EventSpec from a remap value (string or table)."""
  if _stringlike(value):
    return SimpleEvent(sdbsym.resolve(value))
  elif _dictlike(value):
    evname = value.get("event", sdbsym.NONE)
    if not _stringlike(evname):
      raise InvalidMapping(value)
    params = {}
    for k, check in (("max", _intlike), ("min", _intlike),
                     ("scale", _floatlike), ("deadzone", _floatlike)):
      if k in value:
        if not check(value[k]):
          raise InvalidMapping(value)
        params[k] = value[k]
    return ParamEvent(sdbsym.resolve(evname), **params)
  else:
    raise InvalidMapping(value)


class _UniqueKeyLoader (yaml.SafeLoader):
  """SafeLoader for descriptors.

Mapping keys are taken as written ("010" stays "010", as in TOML) and may
not repeat. Merge keys ('<<') are not expanded.
"""
  def construct_mapping (self, node, deep=False):
    if not isinstance(node, yaml.MappingNode):
      raise yaml.constructor.ConstructorError(
        None, None, "expected a mapping node, but found {}".format(node.id), node.start_mark)
    mapping = {}
    for key_node, value_node in node.value:
      if not isinstance(key_node, yaml.ScalarNode):
        raise yaml.constructor.ConstructorError(
          "while constructing a mapping", node.start_mark,
          "found non-scalar key", key_node.start_mark)
      key = self.construct_scalar(key_node)
      if key in mapping:
        raise yaml.constructor.ConstructorError(
          "while constructing a mapping", node.start_mark,
          "found duplicate key {!r}".format(key), key_node.start_mark)
      mapping[key] = self.construct_object(value_node, deep=deep)
    return mapping


def _load_tree (text, fmt):
  if fmt == "toml":
    try:
      return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
      raise MalformedDescriptor(str(e))
  elif fmt == "yaml":
    try:
      return yaml.load(text, Loader=_UniqueKeyLoader)
    except yaml.YAMLError as e:
      raise MalformedDescriptor(str(e))
  raise ValueError("Unknown descriptor format '{}'".format(fmt))


def _required (tree, k, check):
  if k not in tree:
    raise MalformedDescriptor("missing field '{}'".format(k))
  v = tree[k]
  if not check(v):
    raise MalformedDescriptor("field '{}' has wrong type: {!r}".format(k, v))
  return v


def ident_of (filename):
  """Device identifier: first 16 characters of the file name."""
  base = os.path.basename(filename)
  if len(base) < IDENT_LEN:
    raise MalformedDescriptor("file name shorter than {} characters: {!r}".format(IDENT_LEN, base))
  return base[:IDENT_LEN]


def parse (text, ident, fmt="toml"):
  """Build DeviceRecord from descriptor source 'text'."""
  if len(ident) != IDENT_LEN:
    raise MalformedDescriptor("identifier must be {} characters: {!r}".format(IDENT_LEN, ident))
  tree = _load_tree(text, fmt)
  if not _dictlike(tree):
    raise MalformedDescriptor("document is not a table")

  name = _required(tree, "name", _stringlike)
  devtype = _required(tree, "type", _stringlike)
  remap = _required(tree, "remap", _dictlike)

  try:
    family = FAMILIES[devtype]
  except KeyError:
    raise UnknownDeviceType(devtype)

  entries = []
  for k, v in remap.items():
    if not _stringlike(k):
      raise MalformedDescriptor("remap key has wrong type: {!r}".format(k))
    entries.append(RemapEntry(k, parse_key(k), parse_event(v)))

  return DeviceRecord(ident, name, family, entries)


def format_of (filename, yaml_suffixes=(".yaml", ".yml")):
  _, ext = os.path.splitext(filename)
  return "yaml" if ext.lower() in yaml_suffixes else "toml"


def load (path, yaml_suffixes=(".yaml", ".yml")):
  """Read and parse the descriptor file at 'path'."""
  ident = ident_of(path)
  try:
    with open(path, "rt", encoding="utf-8") as infile:
      text = infile.read()
  except OSError as e:
    raise SdbIoError(e)
  except UnicodeDecodeError as e:
    raise SdbIoError(e)
  return parse(text, ident, format_of(path, yaml_suffixes))
