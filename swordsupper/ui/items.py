import asyncio
from nicegui import ui
from typing import Callable, Optional

from swordsupper.core.constants import ITEM_TYPES, RARITY_RANKING, ITEM_PROPERTIES, ITEM_PROPERTY_LABELS
from swordsupper.core.models import ItemRecord
from swordsupper.services.catalog_state import CatalogState
from swordsupper.services.submission_service import SubmissionService
from swordsupper.ui.theme import RARITY_COLORS


class AddItemDialog:
    def __init__(self, on_save: Callable):
        self.on_save = on_save
        self.dialog = ui.dialog()
        self._build_ui()

    def _build_ui(self):
        with self.dialog, ui.card().classes('w-[500px]'):
            ui.label('Contribute Item').classes('text-h6')

            with ui.column().classes('w-full gap-2'):
                self.name_input = ui.input('Name *').classes('w-full').props('autofocus')
                with ui.row().classes('w-full no-wrap'):
                    self.type_select = ui.select({t: t.capitalize() for t in ITEM_TYPES}, label='Type *').classes('w-1/2')
                    self.rarity_select = ui.select({r: r.capitalize() for r in RARITY_RANKING}, label='Rarity *').classes('w-1/2')
                self.desc_input = ui.textarea('Description *').classes('w-full').props('rows=2')
                self.image_input = ui.input('Image URL').classes('w-full')
                self.gold_input = ui.number('Gold Value', min=0, precision=0).classes('w-full')
                self.property_inputs = {}
                with ui.grid(columns=2).classes('w-full'):
                    for key, label in ITEM_PROPERTY_LABELS.items():
                        self.property_inputs[key] = ui.number(f'{label} %', min=0)
                self.source_input = ui.input('Source').classes('w-full')

            with ui.row().classes('w-full justify-end q-mt-md gap-4'):
                ui.button('Cancel', on_click=self.close).props('flat')
                ui.button('Add Item', on_click=self.save).props('color=secondary')

    def open(self):
        self.dialog.open()

    def close(self):
        self.dialog.close()
        for field in (self.name_input, self.desc_input, self.image_input, self.source_input):
            field.value = ''
        for field in (self.type_select, self.rarity_select, self.gold_input, *self.property_inputs.values()):
            field.value = None

    async def save(self):
        data = {
            'name': (self.name_input.value or '').strip(),
            'type': self.type_select.value or '',
            'rarity': self.rarity_select.value or '',
            'description': (self.desc_input.value or '').strip(),
            'image_url': self.image_input.value or None,
            'gold_value': int(self.gold_input.value) if self.gold_input.value is not None else None,
            'source': self.source_input.value or None,
        }
        for key, attr in ITEM_PROPERTIES.items():
            data[attr] = self.property_inputs[key].value
        if await self.on_save(data):
            self.close()


class ItemsPage:
    def __init__(self, state: CatalogState, submissions: SubmissionService):
        self.state = state
        self.submissions = submissions
        self.add_dialog: Optional[AddItemDialog] = None

    def on_state_change(self, event, payload):
        if event in ('loaded', 'item_added', 'items_filtered'):
            self.render_items.refresh()

    async def handle_add(self, data) -> bool:
        item = self.state.add_item(data)
        if not item:
            return False
        asyncio.create_task(self.submissions.submit_item(item))
        return True

    def render_filters(self):
        c = self.state.item_criteria

        def bind(field):
            return lambda e: self.state.set_item_filters(**{field: e.value or ''})

        with ui.row().classes('w-full items-center gap-4 bg-gray-800 p-2 rounded'):
            ui.input(placeholder='Search items...', value=c.search, on_change=bind('search')) \
                .props('dark icon=search debounce=300 clearable').classes('w-64')
            ui.select({'': 'All Types', **{t: t.capitalize() for t in ITEM_TYPES}}, value=c.type,
                      label='Type', on_change=bind('type')).classes('w-32')
            ui.select({'': 'All Rarities', **{r: r.capitalize() for r in RARITY_RANKING}}, value=c.rarity,
                      label='Rarity', on_change=bind('rarity')).classes('w-32')
            ui.select({'': 'Any', **ITEM_PROPERTY_LABELS}, value=c.stat,
                      label='Property', on_change=bind('stat')).classes('w-36')
            ui.space()
            ui.button('Add Item', icon='add', on_click=self.add_dialog.open).props('color=secondary')

    @ui.refreshable
    def render_items(self):
        items = self.state.item_view()
        if not items:
            with ui.column().classes('w-full items-center q-pa-xl text-gray-400'):
                ui.icon('diamond', size='3rem')
                ui.label('No items found').classes('text-h6')
                ui.label('Add some items to get started!')
            return

        with ui.grid(columns='repeat(auto-fill, minmax(280px, 1fr))').classes('w-full gap-4'):
            for item in items:
                self.render_item(item)

    def render_item(self, item: ItemRecord):
        with ui.card().classes('w-full bg-gray-900 border border-gray-800 gap-1'):
            with ui.row().classes('w-full justify-between items-start'):
                with ui.column().classes('gap-0'):
                    ui.label(item.name).classes('text-lg font-bold')
                    ui.badge(item.rarity.capitalize(), color=RARITY_COLORS.get(item.rarity, 'grey-5'))
                ui.label(item.type).classes('text-xs uppercase text-gray-400')

            if item.image_url:
                ui.image(item.image_url).classes('w-full h-32 object-contain')

            ui.label(item.description).classes('text-sm')

            if item.gold_value:
                ui.label(f'💰 {item.gold_value} Gold').classes('text-sm text-secondary')

            props = [(label, item.property_value(ITEM_PROPERTIES[key]))
                     for key, label in ITEM_PROPERTY_LABELS.items()]
            props = [(label, value) for label, value in props if value > 0]
            if props:
                with ui.row().classes('gap-2'):
                    for label, value in props:
                        ui.chip(f'{label} {value:g}%').props('dense outline')

            if item.source:
                ui.label(f'Source: {item.source}').classes('text-xs text-gray-400')

    def build_ui(self):
        self.add_dialog = AddItemDialog(on_save=self.handle_add)
        self.render_filters()
        self.render_items()

        self.state.subscribe(self.on_state_change)
        ui.context.client.on_disconnect(lambda: self.state.unsubscribe(self.on_state_change))


def items_page(state: CatalogState, submissions: SubmissionService):
    page = ItemsPage(state, submissions)
    page.build_ui()
