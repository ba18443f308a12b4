from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from canteen.exceptions import NotFoundError


def get_or_not_found(aggregate_cls, identifier, message):
    """Load an aggregate by id, re-raising a miss with a readable message."""
    try:
        return current_domain.repository_for(aggregate_cls).get(str(identifier))
    except ObjectNotFoundError as exc:
        raise NotFoundError({"_entity": [message]}) from exc
