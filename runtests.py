# -*- coding: utf-8 -*-
"""Run all tests for `fprelude`.

Each test module in `fprelude/tests` has a `runtests()` function, which raises
on failure. The modules are also collected by pytest, if you prefer that.
"""

import os
import re
import sys
import traceback
from importlib import import_module

def listtestmodules(path):
    testfiles = listtestfiles(path)
    testmodules = [modname(path, fn) for fn in testfiles]
    return list(sorted(testmodules))

def listtestfiles(path, prefix="test_", suffix=".py"):
    return [fn for fn in os.listdir(path) if fn.startswith(prefix) and fn.endswith(suffix)]

def modname(path, filename):  # some/dir/mod.py --> some.dir.mod
    modpath = re.sub(re.escape(os.path.sep), r".", path)
    themod = re.sub(r"\.py$", r"", filename)
    return ".".join([modpath, themod])

def main():
    failures = []
    for m in listtestmodules(os.path.join("fprelude", "tests")):
        print(f"*** Testing {m}")
        try:
            mod = import_module(m)
            mod.runtests()
        except Exception:
            traceback.print_exc()
            failures.append(m)
    if failures:
        print(f"*** {len(failures)} test module(s) FAILED: {', '.join(failures)}")
    else:
        print("*** ALL tests PASSED")
    return not failures

if __name__ == '__main__':
    if not main():
        sys.exit(1)  # pragma: no cover, this only runs when the tests fail.
