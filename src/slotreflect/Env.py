#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import os
from pathlib import Path
from types import MappingProxyType

from .Obj import Obj


class Env(Obj):
    """Process environment and configuration"""

    _instance = None

    # Prefix of environment variables overriding config keys
    ENV_PREFIX = "SLOTREFLECT_"

    @staticmethod
    def cur():
        if Env._instance is None:
            Env._instance = Env()
        return Env._instance

    def vars(self):
        """Return environment variables as a read-only mapping"""
        return MappingProxyType(dict(os.environ))

    def work_dir(self):
        """Working directory - SLOTREFLECT_WORK_DIR or the current directory"""
        return Path(os.environ.get(self.ENV_PREFIX + "WORK_DIR", os.getcwd()))

    def config_file(self):
        return self.work_dir() / "etc" / "slotreflect" / "config.props"

    def config(self, key, def_val=None):
        """Get configuration value.

        Looks up, in order: environment variable SLOTREFLECT_<KEY> (upper
        case, dots as underscores), then etc/slotreflect/config.props in
        the working directory.

        Args:
            key: Config key like 'log.level'
            def_val: Default value if not found

        Returns:
            Config value or default
        """
        env_key = self.ENV_PREFIX + key.upper().replace(".", "_")
        val = os.environ.get(env_key)
        if val is not None:
            return val

        path = self.config_file()
        if path.exists():
            val = Env.read_props(path).get(key)
            if val is not None:
                return val

        return def_val

    @staticmethod
    def read_props(path):
        """Parse a props file: key=value lines, '#' and '//' comments"""
        props = {}
        with open(path, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#") or line.startswith("//"):
                    continue
                eq = line.find("=")
                if eq < 0:
                    from .Err import ParseErr
                    raise ParseErr.make(f"Invalid name/value pair in {path}: {line}")
                props[line[:eq].strip()] = line[eq + 1:].strip()
        return props
