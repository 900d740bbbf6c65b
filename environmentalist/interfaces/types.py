# environmentalist/interfaces/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Callable, Optional

PathFragment = str
Directory = str
Extension = str

# Result returned by the resolver: an existing file path, or None when nothing matched.
ResolvedPath = Optional[str]

# Callback Types
NamingConventionRule = Callable[[str], PathFragment]
HandlerFunc = Callable[..., Any]
LoadFunc = Callable[[str, str], Any]

# Returned by a handler that declines an event; compared by identity.
NOT_HANDLED = False
