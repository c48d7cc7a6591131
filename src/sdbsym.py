#!/usr/bin/env python3
# encoding=utf-8

# Symbol table for SDB controller mappings.
#
# Maps logical event names (buttons, axes) to the one-byte codes understood
# by the runtime controller library.

from collections import OrderedDict



##########
# Errors #
##########

class SdbError (Exception):
  """Base class for all fatal compilation errors.

'path' is filled in by the aggregator with the descriptor file being compiled.
"""
  def __init__ (self, value, *args):
    Exception.__init__(self, value, *args)
    self.value = value
    self.path = None

  def _describe (self):
    return "{!r}".format(self.value)

  def __str__ (self):
    msg = self._describe()
    if self.path is not None:
      return "{}: {}".format(self.path, msg)
    return msg


class UnknownSymbol (SdbError):
  """Name (or code) not present in the symbol table."""
  def _describe (self):
    return "Unknown symbol: {!r}".format(self.value)



################
# Symbol table #
################

# Order is significant: position in the list is the code.
_NAMES = [
  # 0x00
  "None", "Exit", "ActionA", "ActionB", "ActionC", "ActionH", "ActionV", "ActionD",
  "MenuL", "MenuR", "Joy", "Cam", "BumperL", "BumperR", "TriggerL", "TriggerR",
  # 0x10
  "Up", "Down", "Left", "Right", "HatUp", "HatDown", "HatLeft", "HatRight",
  "MicUp", "MicDown", "MicLeft", "MicRight", "PovUp", "PovDown", "PovLeft", "PovRight",
  # 0x20
  "JoyX", "JoyY", "JoyZ", "CamX", "CamY", "CamZ", "Slew", "Throttle",
  "ThrottleL", "ThrottleR", "Volume", "Wheel", "Rudder", "Gas", "Brake", "MicPush",
  # 0x30
  "Trigger", "Bumper", "ActionL", "ActionM", "ActionR", "Pinky", "PinkyForward", "PinkyBackward",
  "FlapsUp", "FlapsDown", "BoatForward", "BoatBackward", "AutopilotPath", "AutopilotAlt", "EngineMotorL", "EngineMotorR",
  # 0x40
  "EngineFuelFlowL", "EngineFuelFlowR", "EngineIgnitionL", "EngineIgnitionR",
  "SpeedbrakeBackward", "SpeedbrakeForward", "ChinaBackward", "ChinaForward",
  "Apu", "RadarAltimeter", "LandingGearSilence", "Eac",
  "AutopilotToggle", "ThrottleButton", "MouseX", "MouseY",
  # 0x50
  "Mouse", "PaddleLeft", "PaddleRight", "PinkyLeft", "PinkyRight", "Context", "Dpi", "ScrollX",
  "ScrollY", "Scroll", "TrimUp", "TrimDown", "TrimLeft", "TrimRight",
  ]

SYMBOLS = OrderedDict((name, code) for code, name in enumerate(_NAMES))
_CODES = dict((code, name) for name, code in SYMBOLS.items())

# Event used by a parameterized mapping that names no event.
NONE = "None"


def resolve (name):
  """Logical code (int) for 'name'; exact, case-sensitive match."""
  try:
    return SYMBOLS[name]
  except (KeyError, TypeError):
    raise UnknownSymbol(name)

def hexcode (name):
  return "{:02X}".format(resolve(name))

def name_of (code):
  try:
    return _CODES[code]
  except (KeyError, TypeError):
    raise UnknownSymbol(code)
