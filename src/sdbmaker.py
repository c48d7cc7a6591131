#!/usr/bin/env python3
# encoding=utf-8

# Compile a directory of controller mapping descriptors into one SDB file.

import os
import sys, argparse
import logging

import sdbdesc, sdbfmt
from sdbsym import SdbError
from sdbdesc import SdbIoError

LOG = logging.getLogger("sdb.maker")

SOURCE_DIR = "./sdb/linux/"
OUTPUT_PATH = "./stick/remap_linux.sdb"
YAML_SUFFIXES = (".yaml", ".yml")


def descriptor_paths (directory):
  """Regular files in 'directory', sorted by file name."""
  try:
    names = sorted(os.listdir(directory))
  except OSError as e:
    raise SdbIoError(e)
  paths = [ os.path.join(directory, n) for n in names ]
  return [ p for p in paths if os.path.isfile(p) ]


def compile (directory, yaml_suffixes=YAML_SUFFIXES):
  """Database bytes for every descriptor in 'directory'.

Raises SdbError (with .path set to the offending file) on the first failure.
"""
  lines = []
  for path in descriptor_paths(directory):
    LOG.debug("compiling %s", path)
    try:
      record = sdbdesc.load(path, yaml_suffixes)
      lines.append(sdbfmt.encode(record))
    except SdbError as e:
      e.path = path
      raise
  LOG.info("compiled %d controller mappings", len(lines))
  return sdbfmt.RECORD_SEP.join(lines).encode("utf-8")


def write (data, dst):
  """Replace 'dst' with 'data' in one step."""
  tmpname = "{}.tmp".format(dst)
  try:
    with open(tmpname, "wb") as outfile:
      outfile.write(data)
    os.replace(tmpname, dst)
  except OSError as e:
    try:
      if os.path.exists(tmpname):
        os.remove(tmpname)
    except OSError as cleanup:
      LOG.warning("could not remove %s: %s", tmpname, cleanup)
    err = SdbIoError(e)
    err.path = dst
    raise err


def build (src=SOURCE_DIR, dst=OUTPUT_PATH, yaml_suffixes=YAML_SUFFIXES):
  LOG.info("Loading controller mapping descriptors from %s", src)
  data = compile(src, yaml_suffixes)
  write(data, dst)
  LOG.info("wrote %d bytes to %s", len(data), dst)
  return data




def cli (argv):
  parser = argparse.ArgumentParser(description="Compile controller mapping descriptors into an SDB database.")
  parser.add_argument('-i', '--input', metavar='DIR', nargs=1,
                      help='Descriptor directory [{}]'.format(SOURCE_DIR))
  parser.add_argument('-o', '--output', metavar='FILE', nargs=1,
                      help='Output SDB file [{}]'.format(OUTPUT_PATH))
  parser.add_argument('-v', '--verbose', action='store_true',
                      help='Report each descriptor')

  args = parser.parse_args(argv[1:])

  srcname = args.input[-1] if args.input else SOURCE_DIR
  dstname = args.output[-1] if args.output else OUTPUT_PATH

  logging.basicConfig(
    level=logging.DEBUG if args.verbose else logging.INFO,
    format="%(name)s: %(levelname)s: %(message)s")

  try:
    build(srcname, dstname)
  except SdbError as e:
    LOG.error("%s", e)
    return 1

  return 0


def main ():
  return cli(sys.argv)


if __name__ == "__main__":
  errcode = cli(sys.argv)
  sys.exit(errcode)
