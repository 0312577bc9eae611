from nicegui import ui, app

from swordsupper.core.logging_setup import setup_logging
setup_logging()

from swordsupper.services.catalog_state import CatalogState
from swordsupper.services.submission_service import SubmissionService
from swordsupper.ui.layout import create_layout, tab_opener
from swordsupper.ui.bosses import bosses_page
from swordsupper.ui.items import items_page
from swordsupper.ui.reference import abilities_page, level_gold_page

# One catalog per process, shared by every page
catalog = CatalogState()
app.on_startup(catalog.initialize)


def submissions() -> SubmissionService:
    return SubmissionService(catalog.notifier, opener=tab_opener())


@ui.page('/')
def home():
    service = submissions()
    create_layout(catalog, lambda: bosses_page(catalog, service))

@ui.page('/items')
def items():
    service = submissions()
    create_layout(catalog, lambda: items_page(catalog, service))

@ui.page('/abilities')
def abilities():
    create_layout(catalog, lambda: abilities_page(catalog))

@ui.page('/level_gold')
def level_gold():
    create_layout(catalog, lambda: level_gold_page(catalog))

if __name__ in {"__main__", "__mp_main__"}:
    # Disable reload to prevent restart loops when writing to data/ directory
    ui.run(title='Sword & Supper Filter', favicon='⚔️', reload=False)
