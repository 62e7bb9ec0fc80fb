"""Opt a callable out of the package-wide `beartype_this_package()`"""

from __future__ import annotations

from beartype import BeartypeConf, BeartypeStrategy, beartype

nobeartype = beartype(conf=BeartypeConf(strategy=BeartypeStrategy.O0))
