"""ta_sdk

Contracts shared by providers and the data collector runtime.

Why this exists
---------------
Providers (plug-ins for one middleware) only ever see this package. It owns:

* the command grammar a provider declares (:mod:`ta_sdk.commands`)
* the domain documents a provider hands back (:mod:`ta_sdk.domain`)
* the abstract provider interface (:mod:`ta_sdk.provider`)
* the error types both sides raise (:mod:`ta_sdk.errors`)

The CLI (``cli/``) and the coordinator (``pipeline/``) build on top of it; it
never imports them.
"""

from __future__ import annotations

__version__ = "1.0.0"
