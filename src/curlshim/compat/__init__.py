# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Static-style entry points."""

from .adapters import (
    create,
    delete,
    get,
    get_default_dispatcher,
    patch,
    post,
    put,
    request,
    set_default_dispatcher,
)

__all__ = [
    "create",
    "delete",
    "get",
    "get_default_dispatcher",
    "patch",
    "post",
    "put",
    "request",
    "set_default_dispatcher",
]
