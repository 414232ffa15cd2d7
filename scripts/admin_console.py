#!/usr/bin/env python3
# =============================================================================
# scripts/admin_console.py - Interactive Catalog Admin
# =============================================================================
# Browse, search, edit and delete quotes, books and jobs from the terminal.
#
# Usage:
#   python scripts/admin_console.py            # Starts on the quotes tab
#   python scripts/admin_console.py books      # Starts on another tab
#
# Commands:
#   /tab <quotes|books|jobs> - Switch tab (clears search, reloads)
#   /list                    - Show the (filtered) list
#   /search [term]           - Filter the list; no term clears the filter
#   /edit <n>                - Open item n of the list in the editor
#   /new                     - Open a blank record
#   /show                    - Show the record being edited
#   /set <field> <value>     - Change a field (offset as "x,y")
#   /image <path>            - Stage an image; uploaded on /save
#   /save                    - Save the record being edited
#   /cancel                  - Close the editor without saving
#   /delete <n>              - Delete item n (asks for confirmation)
#   /random [category]       - Show a random record
#   /categories              - Show suggested categories
#   /seed                    - Insert starter quotes and books
#   /help                    - Show help
#   /quit or /exit           - Exit
# =============================================================================

import logging
import mimetypes
import os
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from app.config import settings
from app.dependencies import get_row_store
from core.admin_console import AdminConsole
from core.models.catalog import CatalogRecord, EntityKind
from core.services.seed_service import seed_database

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def summarize(console: AdminConsole, record: CatalogRecord) -> str:
    """One-line summary of a record for list views."""
    config = console.config
    title = getattr(record, config.search_fields[0]) or "(empty)"
    if len(title) > 60:
        title = title[:57] + "..."
    category = getattr(record, config.category_field) or "-"
    second = getattr(record, config.search_fields[1]) if len(config.search_fields) > 1 else ""
    downloaded = " [downloaded]" if record.last_downloaded else ""
    return f"{title} | {second or '-'} | {category}{downloaded}"


def print_header(console: AdminConsole):
    print("\n" + "=" * 60)
    print("  CATALOG ADMIN")
    print("=" * 60)
    print(f"  Tab: {console.config.label}  |  Type /help for commands")
    print("=" * 60 + "\n")


def print_help():
    """Print help message."""
    print("\n" + "-" * 40)
    print("COMMANDS:")
    print("  /tab <quotes|books|jobs>  - Switch tab")
    print("  /list                     - Show the list")
    print("  /search [term]            - Filter the list")
    print("  /edit <n> | /new          - Open the editor")
    print("  /show                     - Show the form")
    print("  /set <field> <value>      - Change a field")
    print("  /image <path>             - Stage an image")
    print("  /save | /cancel           - Finish editing")
    print("  /delete <n>               - Delete an item")
    print("  /random [category]        - Random pick")
    print("  /categories               - Suggested categories")
    print("  /seed                     - Insert starter content")
    print("  /quit                     - Exit")
    print("-" * 40 + "\n")


def print_list(console: AdminConsole):
    items = console.visible_items
    search = f' matching "{console.search_term}"' if console.search_term else ""
    print(f"\n  {console.config.label}: {len(items)} records found{search}\n")
    for position, item in enumerate(items, start=1):
        print(f"  {position:>3}. {summarize(console, item)}")
    print()


def print_form(console: AdminConsole):
    editor = console.editor
    if editor is None:
        print("\n  Nothing is open. Use /edit <n> or /new.\n")
        return

    state = "new record" if editor.is_new else f"id {editor.form.id}"
    print(f"\n  Editing {console.config.label[:-1].lower()} ({state})")
    for key, value in editor.form.model_dump(by_alias=True, exclude={"id", "last_downloaded"}).items():
        print(f"    {key}: {value}")
    image_url = console.preview_image_url()
    if editor.staged_image is not None:
        print(f"    [staged image: {editor.staged_image.filename}, {editor.staged_image.size_bytes} bytes, local preview {image_url[:40]}...]")
    elif image_url:
        print(f"    [image: {image_url}]")
    else:
        print("    [no image]")
    if editor.error:
        print(f"\n  Last save failed: {editor.error}")
    print()


def pick_item(console: AdminConsole, arg: str) -> CatalogRecord | None:
    """Resolve a 1-based list position to a record."""
    items = console.visible_items
    try:
        position = int(arg)
    except ValueError:
        print(f"\n  Not a list position: {arg}\n")
        return None
    if not items:
        print("\n  The list is empty.\n")
        return None
    if not 1 <= position <= len(items):
        print(f"\n  Choose a position between 1 and {len(items)}.\n")
        return None
    return items[position - 1]


def parse_value(field: str, raw: str):
    """Offsets are typed as "x,y"; everything else is taken as-is."""
    if field in ("authorImageOffset", "author_image_offset"):
        x, _, y = raw.partition(",")
        return {"x": x.strip() or 0, "y": y.strip() or 0}
    return raw


def handle_command(console: AdminConsole, command: str, arg: str) -> bool:
    """Run one slash command. Returns False when the console should exit."""
    if command in ("/quit", "/exit", "/q"):
        if console.editor is not None:
            print("\n  Warning: unsaved edits are discarded.")
        print("\n  Goodbye!\n")
        return False

    if command == "/help":
        print_help()

    elif command == "/tab":
        try:
            console.switch_tab(arg.strip().lower())
        except ValueError:
            print(f"\n  Unknown tab: {arg}. Use quotes, books or jobs.\n")
            return True
        print_list(console)

    elif command == "/list":
        print_list(console)

    elif command == "/search":
        console.set_search(arg)
        print_list(console)

    elif command == "/edit":
        item = pick_item(console, arg)
        if item is not None:
            console.open_editor(item)
            print_form(console)

    elif command == "/new":
        console.open_new()
        print_form(console)

    elif command == "/show":
        print_form(console)

    elif command == "/set":
        field, _, raw = arg.partition(" ")
        try:
            console.update_field(field, parse_value(field, raw))
            print(f"\n  {field} updated.\n")
        except (RuntimeError, ValueError) as e:
            print(f"\n  {e}\n")

    elif command == "/image":
        path = Path(arg.strip()).expanduser()
        if not path.is_file():
            print(f"\n  File not found: {path}\n")
            return True
        content_type, _ = mimetypes.guess_type(path.name)
        try:
            console.stage_image(path.name, path.read_bytes(), content_type)
            print(f"\n  Staged {path.name}; it will be uploaded on /save.\n")
        except RuntimeError as e:
            print(f"\n  {e}\n")

    elif command == "/save":
        if console.editor is None:
            print("\n  Nothing is open.\n")
            return True
        print("\n  Saving...")
        saved = console.save()
        if saved is None:
            print(f"  Save failed: {console.editor.error if console.editor else 'unknown error'}\n")
        else:
            listed = console.find_item(saved.id)
            print(f"  Saved (id {saved.id}): {summarize(console, listed or saved)}")
            print_list(console)

    elif command == "/cancel":
        console.close_editor()
        print("\n  Editor closed.\n")

    elif command == "/delete":
        item = pick_item(console, arg)
        if item is None or item.id is None:
            return True
        console.request_delete(item.id)
        answer = input(f"  Delete \"{summarize(console, item)}\" permanently? [y/N] ").strip().lower()
        if answer not in ("y", "yes"):
            console.cancel_delete()
            print("\n  Kept.\n")
        elif console.confirm_delete():
            print("\n  Deleted.\n")
        else:
            print(f"\n  Delete failed: {console.last_error}\n")

    elif command == "/random":
        record = console.pick_random(arg.strip() or None)
        if record is None:
            print("\n  Nothing matched.\n")
        else:
            print(f"\n  {summarize(console, record)}\n")

    elif command == "/categories":
        categories = console.config.categories
        print("\n  " + (", ".join(categories) if categories else "No suggestions for this tab (free text).") + "\n")

    elif command == "/seed":
        result = seed_database(console.store)
        print(f"\n  {result.message}\n")
        console.refresh()

    else:
        print(f"\n  Unknown command: {command}. Type /help.\n")

    return True


def main():
    """Main console loop."""
    kind = sys.argv[1] if len(sys.argv) > 1 else EntityKind.QUOTES.value
    try:
        console = AdminConsole(get_row_store(), EntityKind(kind))
    except ValueError:
        print(f"\nError: unknown tab '{kind}'. Use quotes, books or jobs.")
        sys.exit(1)

    print_header(console)
    console.refresh()
    print_list(console)

    while True:
        try:
            user_input = input("admin> ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\n\n  Goodbye!\n")
            break

        if not user_input:
            continue
        if not user_input.startswith("/"):
            print("\n  Commands start with '/'. Type /help.\n")
            continue

        command, _, arg = user_input.partition(" ")
        if not handle_command(console, command.lower(), arg):
            break


if __name__ == "__main__":
    main()
