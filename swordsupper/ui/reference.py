from nicegui import ui

from swordsupper.core.constants import ABILITY_CATEGORIES
from swordsupper.services.catalog_state import CatalogState


class AbilitiesPage:
    def __init__(self, state: CatalogState):
        self.state = state

    @ui.refreshable
    def render_abilities(self):
        with ui.grid(columns='repeat(auto-fill, minmax(260px, 1fr))').classes('w-full gap-4'):
            for ability in self.state.ability_view():
                color = 'border-secondary' if ability.category == 'temple' else 'border-gray-700'
                with ui.card().classes(f'w-full bg-gray-900 border {color} gap-1'):
                    ui.label(ability.name).classes('font-bold')
                    ui.label(ability.description).classes('text-sm text-gray-300')

    def build_ui(self):
        def select(category):
            self.state.set_ability_category(category)
            self.render_abilities.refresh()

        with ui.row().classes('gap-2'):
            ui.toggle({'all': 'All', **{c: c.capitalize() for c in ABILITY_CATEGORIES}},
                      value=self.state.ability_category, on_change=lambda e: select(e.value))
        self.render_abilities()


class LevelGoldPage:
    def __init__(self, state: CatalogState):
        self.state = state
        self.dialog = None

    def on_state_change(self, event, payload):
        if event in ('loaded', 'level_gold_added'):
            self.render_costs.refresh()

    @ui.refreshable
    def render_costs(self):
        costs = self.state.level_gold_view()
        if not costs:
            with ui.column().classes('w-full items-center q-pa-xl text-gray-400'):
                ui.icon('paid', size='3rem')
                ui.label('No level/gold costs yet').classes('text-h6')
                ui.label('Add some level/gold costs to get started!')
            return

        with ui.grid(columns='repeat(auto-fill, minmax(180px, 1fr))').classes('w-full gap-4'):
            for cost in costs:
                with ui.card().classes('w-full bg-gray-900 border border-gray-800 items-center'):
                    ui.label(f'Level {cost.level}').classes('text-h6')
                    ui.label(f'{cost.cost} Gold').classes('text-secondary')
                    if cost.submitted_by:
                        ui.link(f'Added by /u/{cost.submitted_by}', f'https://www.reddit.com/user/{cost.submitted_by}',
                                new_tab=True).classes('text-xs text-gray-400')

    def _build_dialog(self):
        self.dialog = ui.dialog()
        with self.dialog, ui.card().classes('w-96'):
            ui.label('Add Level/Gold Cost').classes('text-h6')
            level_input = ui.number('Level *', min=1, precision=0).classes('w-full')
            cost_input = ui.number('Gold Cost *', min=1, precision=0).classes('w-full')
            submitted_input = ui.input('Reddit Username').classes('w-full')

            def save():
                cost = self.state.add_level_gold({
                    'level': int(level_input.value) if level_input.value is not None else None,
                    'cost': int(cost_input.value) if cost_input.value is not None else None,
                    'submitted_by': submitted_input.value or None,
                })
                if cost:
                    self.dialog.close()
                    level_input.value = None
                    cost_input.value = None
                    submitted_input.value = ''

            with ui.row().classes('w-full justify-end q-mt-md gap-4'):
                ui.button('Cancel', on_click=self.dialog.close).props('flat')
                ui.button('Add', on_click=save).props('color=secondary')

    def build_ui(self):
        self._build_dialog()
        with ui.row().classes('w-full items-center'):
            ui.label('Level Up Gold Costs').classes('text-h5')
            ui.space()
            ui.button('Add Cost', icon='add', on_click=self.dialog.open).props('color=secondary')
        self.render_costs()

        self.state.subscribe(self.on_state_change)
        ui.context.client.on_disconnect(lambda: self.state.unsubscribe(self.on_state_change))


def abilities_page(state: CatalogState):
    AbilitiesPage(state).build_ui()


def level_gold_page(state: CatalogState):
    LevelGoldPage(state).build_ui()
