from nicegui import ui
from swordsupper.ui.theme import apply_theme, SEVERITY_TYPES
from swordsupper.core.config import config_manager
from swordsupper.services.catalog_state import CatalogState
from swordsupper.services.dataset_service import DatasetService
from swordsupper.services.notifier import Message


def bind_notifications(state: CatalogState):
    """Shows every catalog message on the current client until it disconnects."""
    client = ui.context.client

    def show(message: Message):
        with client:
            ui.notify(message.text, type=SEVERITY_TYPES.get(message.severity, 'info'),
                      timeout=int(message.timeout * 1000))

    state.notifier.register(show)
    client.on_disconnect(lambda: state.notifier.unregister(show))


def tab_opener():
    """Opener for the current client that shows a URL in a new browser tab."""
    client = ui.context.client

    def open_url(url: str):
        with client:
            ui.navigate.to(url, new_tab=True)

    return open_url


def create_layout(state: CatalogState, content_function):
    """
    Wraps the content_function in the standard application layout
    (Sidebar, Header, Content Area).
    """
    apply_theme()
    bind_notifications(state)

    def open_settings():
        with ui.dialog() as d, ui.card().classes('w-96'):
            ui.label('Settings').classes('text-h6')

            source_input = ui.input('Dataset Source', value=config_manager.get_data_source()).classes('w-full')
            with source_input:
                ui.tooltip('Local JSON/YAML file or http(s) URL of the boss dataset')

            def change_dispatch(e):
                config_manager.set('dispatch_enabled', e.value)

            ui.switch('Submit new instances via GitHub dispatch', value=config_manager.is_dispatch_enabled(),
                      on_change=change_dispatch)

            ui.separator().classes('q-my-md')
            ui.label('Data Management').classes('text-subtitle2 text-grey')

            async def reload_dataset():
                source = source_input.value.strip()
                if source and source != config_manager.get_data_source():
                    config_manager.set('data_source', source)
                state.bosses.dataset = DatasetService(source or None)
                n = ui.notification('Reloading boss data...', type='info', spinner=True, timeout=None)
                await state.initialize()
                n.dismiss()
                if not state.load_error:
                    ui.notify(f'Loaded {len(state.bosses)} instances.', type='positive')

            with ui.button('Reload Boss Data', on_click=reload_dataset, icon='cloud_download').classes('w-full').props('color=secondary'):
                ui.tooltip('Fetch the dataset again and re-apply local additions')

            def confirm_clear():
                with ui.dialog() as confirm, ui.card():
                    ui.label('Are you sure you want to clear all completion marks? This cannot be undone.')
                    with ui.row().classes('w-full justify-end'):
                        ui.button('Cancel', on_click=confirm.close).props('flat')

                        def do_clear():
                            state.clear_completions()
                            confirm.close()

                        ui.button('Clear', on_click=do_clear).props('color=negative')
                confirm.open()

            with ui.button('Clear Completions', on_click=confirm_clear, icon='restart_alt').classes('w-full q-mt-sm').props('color=warning'):
                ui.tooltip('Remove every completion mark')

            with ui.row().classes('w-full justify-end q-mt-md'):
                ui.button('Close', on_click=d.close).props('flat')
        d.open()

    # Define the drawer first so it's available for the toggle button
    with ui.left_drawer(value=True).classes('bg-dark text-white') as left_drawer:
        with ui.column().classes('w-full q-mt-md'):
            ui.label('Navigation').classes('text-grey-4 q-px-md text-sm uppercase font-bold')

            def nav_button(text, icon, target):
                ui.button(text, icon=icon, on_click=lambda: ui.navigate.to(target)).props('flat align=left').classes('w-full text-grey-3 hover:bg-white/10')

            nav_button('Instances', 'castle', '/')
            nav_button('Items', 'diamond', '/items')
            nav_button('Abilities', 'bolt', '/abilities')
            nav_button('Level / Gold', 'paid', '/level_gold')

            ui.separator().classes('q-my-md bg-grey-8')
            ui.label('Settings').classes('text-grey-4 q-px-md text-sm uppercase font-bold')

            with ui.button('Configuration', icon='settings', on_click=open_settings).props('flat align=left').classes('w-full text-grey-3 hover:bg-white/10'):
                ui.tooltip('Open application settings and data management')

    with ui.header().classes(replace='row items-center') as header:
        header.classes('bg-primary text-white')
        ui.button(on_click=lambda: left_drawer.toggle(), icon='menu').props('flat color=white')
        ui.label('Sword & Supper Filter').classes('text-h6 q-ml-md font-bold')

    with ui.column().classes('w-full q-pa-md items-start'):
        content_function()
