"""Configuration-block detection for Python signatures.

A configuration block is a trailing parameter typed ``Callable[[T], None]``
(optionally ``Optional[...]`` when the block may be omitted). Calling it
with an object of type ``T`` configures that object.
"""

from __future__ import annotations

import collections.abc
from typing import Any, get_args, get_origin

from dslschema.extraction.host_types import is_subtype, is_unit, unwrap_optional


class CallableConfigureLambdaHandler:
    """ConfigureLambdaHandler recognizing ``Callable[[T], None]`` parameters."""

    def type_configured_by_lambda(self, maybe_lambda_type: Any) -> Any | None:
        candidate = unwrap_optional(maybe_lambda_type)
        if get_origin(candidate) is not collections.abc.Callable:
            return None

        args = get_args(candidate)
        if len(args) != 2:
            return None
        params, result = args
        if not isinstance(params, list) or len(params) != 1:
            return None
        if not is_unit(result):
            return None
        return params[0]

    def is_configure_lambda_for_type(self, configured_type: Any, maybe_lambda_type: Any) -> bool:
        # A block accepting a supertype can still configure the subtype.
        configured_by_lambda = self.type_configured_by_lambda(maybe_lambda_type)
        return configured_by_lambda is not None and is_subtype(
            unwrap_optional(configured_type), configured_by_lambda
        )


default_configure_lambdas = CallableConfigureLambdaHandler()
