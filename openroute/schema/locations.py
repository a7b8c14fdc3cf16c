"""Group declared parameters by the request location they are read from."""

from collections.abc import Iterable, Mapping

from openroute.core.exceptions import MissingParameterNameError
from openroute.schema.parameters import Location, Parameter

type GroupedParameters = dict[Location, dict[str, Parameter]]


def classify_parameters(
    parameters: Iterable[Parameter] | Mapping[str, Parameter] | None,
) -> GroupedParameters:
    """Partition parameters into ``{location: {name: parameter}}``.

    Declaration order is kept inside each location. In list form every
    parameter must carry a name; in mapping form the key is the name unless the
    parameter sets one explicitly.

    Args:
        parameters: Declared parameters, as a list or a name mapping.

    Returns:
        GroupedParameters: Named parameters grouped by location. Locations
            without parameters are absent.

    Raises:
        MissingParameterNameError: If a parameter in list form has no name.
    """
    grouped: GroupedParameters = {}
    if not parameters:
        return grouped

    if isinstance(parameters, Mapping):
        named = [parameter.named(key) for key, parameter in parameters.items()]
    else:
        named = []
        for position, parameter in enumerate(parameters):
            if parameter.name is None:
                raise MissingParameterNameError(position)
            named.append(parameter)

    for parameter in named:
        # named() guarantees a name at this point
        grouped.setdefault(parameter.location, {})[str(parameter.name)] = parameter
    return grouped
