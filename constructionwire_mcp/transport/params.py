"""Split a flat call-parameter object into path, query and body buckets."""

from typing import Any, Mapping, Optional

from ..exceptions import ConstructionWireValidationError
from ..models import APIEndpoint, ClassifiedParameters, ParamLocation
from .paths import DEFAULT_USER_ID


def join_array(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return ",".join(_scalar_text(v) for v in value)
    return value


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def classify_parameters(
    endpoint: APIEndpoint,
    params: Optional[Mapping[str, Any]],
) -> ClassifiedParameters:
    """Assign every supplied parameter to exactly one request location

    Declared parameters go where the endpoint says. Anything undeclared goes
    to the query string for GET/DELETE and to the body for POST/PUT/PATCH,
    since some vendor endpoints accept dynamic fields.
    """
    params = params or {}
    result = ClassifiedParameters()

    for param in endpoint.path_parameters:
        if param.name in params:
            result.path_params[param.name] = params[param.name]
        elif param.name == "userId":
            result.path_params[param.name] = DEFAULT_USER_ID

    for key, value in params.items():
        if key in result.path_params:
            continue
        declared = endpoint.parameter(key)
        if declared is None:
            if endpoint.method.sends_body:
                result.body_params[key] = value
            else:
                result.query_params[key] = value
        elif declared.location is ParamLocation.QUERY:
            result.query_params[key] = join_array(value) if declared.is_array else value
        elif declared.location is ParamLocation.BODY:
            result.body_params[key] = value

    return result


def validate_required(endpoint: APIEndpoint, params: Optional[Mapping[str, Any]]) -> None:
    params = params or {}
    for param in endpoint.required_parameters:
        if param.name == "userId":
            continue
        if params.get(param.name) is None:
            raise ConstructionWireValidationError(f"Missing required parameter: {param.name}")


__all__ = [
    "classify_parameters",
    "validate_required",
    "join_array",
]
