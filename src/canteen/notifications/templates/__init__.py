"""Template registry: maps template names to template classes."""

from canteen.notifications.templates.order_confirmation import OrderConfirmationTemplate
from canteen.notifications.templates.order_status_update import OrderStatusUpdateTemplate
from canteen.notifications.templates.password_reset import PasswordResetTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    PasswordResetTemplate.name: PasswordResetTemplate,
    OrderConfirmationTemplate.name: OrderConfirmationTemplate,
    OrderStatusUpdateTemplate.name: OrderStatusUpdateTemplate,
}


def get_template(name: str):
    """Look up a template class by name."""
    template_cls = TEMPLATE_REGISTRY.get(name)
    if template_cls is None:
        raise ValueError(f"No template registered with name: {name}")
    return template_cls
