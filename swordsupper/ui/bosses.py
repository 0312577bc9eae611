import asyncio
from nicegui import ui
from typing import Callable, Optional

from swordsupper.core.constants import (
    LEVEL_BUCKETS, DIFFICULTIES, INSTANCE_TYPES, BOSS_TYPES, BOSS_RUSH,
    MODIFIER_RUINED_PATH, MODIFIER_INCREASED, COMPLETION_COMPLETED, COMPLETION_INCOMPLETE
)
from swordsupper.core.models import BossRecord
from swordsupper.services.catalog_state import CatalogState
from swordsupper.services.submission_service import SubmissionService


SORT_OPTIONS = {'level': 'Level', 'difficulty': 'Difficulty', 'name': 'Name', 'type': 'Type'}

# State events that change the boss table or its stats
BOSS_EVENTS = {
    'loaded', 'bosses_filtered', 'bosses_sorted', 'boss_added', 'boss_deleted',
    'completion_toggled', 'completions_cleared'
}


def difficulty_label(boss: BossRecord) -> str:
    if boss.is_boss_rush:
        return '🏃 Boss Rush'
    return '⭐' * (boss.numeric_difficulty or 0)


class AddBossDialog:
    def __init__(self, on_save: Callable):
        self.on_save = on_save
        self.dialog = ui.dialog()
        self._build_ui()

    def _build_ui(self):
        with self.dialog, ui.card().classes('w-[500px]'):
            ui.label('Add Instance').classes('text-h6')

            with ui.column().classes('w-full gap-2'):
                self.name_input = ui.input('Name *').classes('w-full').props('autofocus')
                self.level_select = ui.select(LEVEL_BUCKETS, label='Level *').classes('w-full')
                self.difficulty_select = ui.select(
                    {d: ('Boss Rush' if d == BOSS_RUSH else f'{d} Star') for d in DIFFICULTIES},
                    label='Difficulty *'
                ).classes('w-full')
                self.instance_type_select = ui.select(
                    {t: t.capitalize() for t in INSTANCE_TYPES}, label='Instance Type *'
                ).classes('w-full')
                self.location_input = ui.input('Location').classes('w-full')
                self.link_input = ui.input('Reddit Link').classes('w-full')
                self.submitted_by_input = ui.input('Reddit Username').classes('w-full')
                with ui.row():
                    self.ruined_path_check = ui.checkbox('Ruined Path')
                    self.increased_check = ui.checkbox('Increased')

            with ui.row().classes('w-full justify-end q-mt-md gap-4'):
                ui.button('Cancel', on_click=self.close).props('flat')
                ui.button('Add Instance', on_click=self.save).props('color=secondary')

    def open(self):
        self.dialog.open()

    def close(self):
        self.dialog.close()
        self.reset()

    def reset(self):
        for field in (self.name_input, self.location_input, self.link_input, self.submitted_by_input):
            field.value = ''
        for field in (self.level_select, self.difficulty_select, self.instance_type_select):
            field.value = None
        self.ruined_path_check.value = False
        self.increased_check.value = False

    async def save(self):
        data = {
            'name': (self.name_input.value or '').strip(),
            'level': self.level_select.value or '',
            'difficulty': self.difficulty_select.value,
            'instance_type': self.instance_type_select.value or '',
            'location': self.location_input.value or None,
            'external_link': self.link_input.value or None,
            'submitted_by': self.submitted_by_input.value or None,
            'has_ruined_path': bool(self.ruined_path_check.value),
            'has_increased': bool(self.increased_check.value),
        }
        if await self.on_save(data):
            self.close()


class BossesPage:
    def __init__(self, state: CatalogState, submissions: SubmissionService):
        self.state = state
        self.submissions = submissions
        self.add_dialog: Optional[AddBossDialog] = None

    def on_state_change(self, event, payload):
        if event not in BOSS_EVENTS:
            return
        self.render_stats.refresh()
        self.render_table.refresh()

    async def handle_add(self, data) -> bool:
        boss = self.state.add_boss(data)
        if not boss:
            return False
        # Fire and forget, the local add already succeeded
        asyncio.create_task(self.submissions.submit_instance(boss))
        return True

    def confirm_delete(self, boss: BossRecord):
        with ui.dialog() as d, ui.card():
            ui.label(f'Delete "{boss.name}"?')
            with ui.row().classes('w-full justify-end'):
                ui.button('Cancel', on_click=d.close).props('flat')

                def do_delete():
                    self.state.delete_boss(boss.id)
                    d.close()

                ui.button('Delete', on_click=do_delete).props('color=negative')
        d.open()

    @ui.refreshable
    def render_stats(self):
        stats = self.state.stats()
        with ui.row().classes('w-full gap-4'):
            for label, value in [
                ('Total Instances', stats.total_bosses),
                ('Boss Rushes', stats.boss_rushes),
                ('Avg Difficulty', f"{stats.average_difficulty:.1f}"),
                ('Completed', f"{stats.completion.completed} / {stats.completion.total}"),
                ('Completion Rate', f"{stats.completion.percentage}%"),
            ]:
                with ui.card().classes('p-3 bg-gray-900 border border-gray-800'):
                    ui.label(str(value)).classes('text-h6 text-secondary')
                    ui.label(label).classes('text-xs text-gray-400 uppercase')

    def render_filters(self):
        c = self.state.boss_criteria

        def bind(field):
            return lambda e: self.state.set_boss_filters(**{field: e.value if e.value is not None else ''})

        with ui.row().classes('w-full items-center gap-4 bg-gray-800 p-2 rounded'):
            ui.input(placeholder='Search instances...', value=c.search, on_change=bind('search')) \
                .props('dark icon=search debounce=300 clearable').classes('w-64')
            ui.select({'': 'All Levels', **{b: b for b in LEVEL_BUCKETS}}, value=c.level,
                      label='Level', on_change=bind('level')).classes('w-32')
            ui.select({'': 'All', **{str(d): ('Boss Rush' if d == BOSS_RUSH else f'{d} Star') for d in DIFFICULTIES}},
                      value=str(c.difficulty), label='Difficulty', on_change=bind('difficulty')).classes('w-32')
            ui.select({'': 'All Types', **{t: t for t in BOSS_TYPES}}, value=c.type,
                      label='Type', on_change=bind('type')).classes('w-40')
            ui.select({'': 'Any', MODIFIER_RUINED_PATH: 'Ruined Path', MODIFIER_INCREASED: 'Increased'},
                      value=c.modifier, label='Mystery Icon', on_change=bind('modifier')).classes('w-32')
            ui.select({'': 'All', COMPLETION_COMPLETED: 'Completed', COMPLETION_INCOMPLETE: 'Incomplete'},
                      value=c.completion, label='Status', on_change=bind('completion')).classes('w-32')
            ui.switch('Hide Completed', value=c.hide_completed,
                      on_change=lambda e: self.state.set_boss_filters(hide_completed=bool(e.value))).props('color=secondary')

            ui.space()

            with ui.select(SORT_OPTIONS, value=self.state.sort_key, label='Sort',
                           on_change=lambda e: self.state.set_sort(key=e.value)).classes('w-32'):
                ui.tooltip('Completed instances always sort last')

            sort_button = ui.button(icon='arrow_downward' if self.state.sort_descending else 'arrow_upward') \
                .props('flat round dense color=white')

            def toggle_sort_dir():
                self.state.toggle_sort_order()
                sort_button.props(f"icon={'arrow_downward' if self.state.sort_descending else 'arrow_upward'}")

            sort_button.on('click', toggle_sort_dir)

            ui.button('Add Instance', icon='add', on_click=self.add_dialog.open).props('color=secondary')

    @ui.refreshable
    def render_table(self):
        bosses = self.state.boss_view()
        if not bosses:
            with ui.column().classes('w-full items-center q-pa-xl text-gray-400'):
                ui.icon('search', size='3rem')
                ui.label('No bosses found').classes('text-h6')
                ui.label('Try adjusting your search or filter criteria')
            return

        with ui.column().classes('w-full gap-1'):
            for boss in bosses:
                self.render_row(boss)

    def render_row(self, boss: BossRecord):
        done = self.state.is_completed(boss.id)
        with ui.row().classes('w-full items-center gap-4 p-2 rounded bg-gray-900 no-wrap' + (' opacity-50' if done else '')):
            ui.checkbox(value=done, on_change=lambda e, b=boss: self.state.toggle_completion(b.id))
            with ui.column().classes('gap-0 w-64'):
                ui.label(boss.name).classes('font-bold' + (' line-through' if done else ''))
                if boss.submitted_by:
                    ui.link(f'Added by /u/{boss.submitted_by}', f'https://www.reddit.com/user/{boss.submitted_by}',
                            new_tab=True).classes('text-xs text-gray-400')
            ui.label(f'Level {boss.level}').classes('w-28')
            ui.label(difficulty_label(boss)).classes('w-28')
            with ui.row().classes('w-48 items-center gap-1'):
                if boss.instance_type == 'boss':
                    ui.icon('skull', color='negative')
                ui.label(boss.type)
                if boss.has_ruined_path:
                    with ui.icon('landslide', color='warning'):
                        ui.tooltip('Ruined Path')
                if boss.has_increased:
                    with ui.icon('trending_up', color='info'):
                        ui.tooltip('Increased')
            ui.label(boss.location or '-').classes('flex-grow text-gray-400')
            if boss.external_link:
                ui.button(icon='open_in_new', on_click=lambda b=boss: ui.navigate.to(b.external_link, new_tab=True)) \
                    .props('flat round dense color=secondary')
            ui.button(icon='delete', on_click=lambda b=boss: self.confirm_delete(b)).props('flat round dense color=negative')

    def build_ui(self):
        self.add_dialog = AddBossDialog(on_save=self.handle_add)
        self.render_stats()
        self.render_filters()
        self.render_table()

        self.state.subscribe(self.on_state_change)
        ui.context.client.on_disconnect(lambda: self.state.unsubscribe(self.on_state_change))


def bosses_page(state: CatalogState, submissions: SubmissionService):
    page = BossesPage(state, submissions)
    page.build_ui()
