"""Default system field catalog."""

import logging

logger = logging.getLogger(__name__)

# (name, is_required)
DEFAULT_SYSTEM_HEADERS = [
    ('Email', True),
    ('First Name', False),
    ('Last Name', False),
    ('Phone', False),
    ('Address', False),
    ('City', False),
    ('State', False),
    ('Zip', False),
    ('Country', False),
    ('Company', False),
    ('Job Title', False),
]


def seed_system_headers(model=None):
    """Insert the default catalog when the table is empty.

    ``model`` lets data migrations pass their historical model in.
    Returns the number of headers created.
    """
    if model is None:
        from .models import SystemHeader as model

    if model.objects.exists():
        return 0

    model.objects.bulk_create([
        model(name=name, is_required=is_required)
        for name, is_required in DEFAULT_SYSTEM_HEADERS
    ])
    logger.info(f"Seeded {len(DEFAULT_SYSTEM_HEADERS)} system headers")
    return len(DEFAULT_SYSTEM_HEADERS)


def get_system_headers():
    """Catalog in iteration order (name ascending)."""
    from .models import SystemHeader

    return list(SystemHeader.objects.order_by('name'))


def header_labels(system_headers=None):
    if system_headers is None:
        system_headers = get_system_headers()
    return {str(header.id): header.name for header in system_headers}
