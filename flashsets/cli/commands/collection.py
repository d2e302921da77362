"""Collection commands for the flashsets CLI."""

import argparse
import asyncio

from flashsets.cli.helpers import confirm, format_item, log_table
from flashsets.cli.result import (
    CommandResult,
    error,
    from_snapshot,
    info,
    success,
)
from flashsets.config import LOGGER
from flashsets.errors import ItemsFileError, TransientServiceError
from flashsets.services import collection_service, naming_client
from flashsets.utils import load_items
from flashsets.workflows import CollectionSaveWorkflow, create_save_workflow


def setup_parser(subparsers: argparse._SubParsersAction) -> None:
    """Set up the collection command parser and its subcommands."""
    collection_parser = subparsers.add_parser(
        "collection", help="Name and manage saved collections"
    )
    collection_subparsers = collection_parser.add_subparsers(
        dest="collection_command"
    )

    # collection save command - name and persist an item set
    save_parser = collection_subparsers.add_parser(
        "save", help="Save an item file as a named collection"
    )
    save_parser.add_argument("items_file", help="YAML or JSON file with the items")
    save_parser.add_argument(
        "--owner", required=True, help="Account the collection belongs to"
    )
    save_parser.add_argument(
        "--name",
        help="Collection name (a generated name is requested when omitted)",
    )

    # collection suggest command - only ask for a name
    suggest_parser = collection_subparsers.add_parser(
        "suggest", help="Suggest a name for an item file"
    )
    suggest_parser.add_argument("items_file", help="YAML or JSON file with the items")

    # collection list command
    list_parser = collection_subparsers.add_parser(
        "list", help="List collections of an owner"
    )
    list_parser.add_argument("--owner", required=True, help="Account to list")

    # collection show command
    show_parser = collection_subparsers.add_parser(
        "show", help="Show the items of a collection"
    )
    show_parser.add_argument("name", help="Name of the collection")
    show_parser.add_argument("--owner", required=True, help="Account to look in")

    # collection delete command
    delete_parser = collection_subparsers.add_parser(
        "delete", help="Delete a collection"
    )
    delete_parser.add_argument("name", help="Name of the collection")
    delete_parser.add_argument("--owner", required=True, help="Account to look in")
    delete_parser.add_argument(
        "--confirm", action="store_true", help="Skip confirmation prompt"
    )


def handle_command(args: argparse.Namespace) -> None:
    """Route collection subcommands to their appropriate handlers."""
    handlers = {
        "save": collection_save,
        "suggest": collection_suggest,
        "list": collection_list,
        "show": collection_show,
        "delete": collection_delete,
    }

    handler = handlers.get(args.collection_command)
    if handler:
        result = handler(args)
        result.log()
        if result.exit_code != 0:
            exit(result.exit_code)
    else:
        result = error(f"Unknown collection subcommand: {args.collection_command}")
        result.log()
        exit(1)


async def run_save(workflow: CollectionSaveWorkflow, name: str | None) -> None:
    """Drive a save workflow: pick a name, then submit it once."""
    if name is None:
        if not await workflow.request_name_suggestion():
            return
        LOGGER.info(f"Suggested name: {workflow.snapshot.candidate_name}")
    else:
        workflow.set_name(name)

    await workflow.submit()


def collection_save(args: argparse.Namespace) -> CommandResult:
    """Save an item file as a named collection."""
    try:
        items = load_items(args.items_file)
    except ItemsFileError as e:
        return error(str(e))

    workflow = create_save_workflow(
        items,
        args.owner,
        on_complete=lambda collection_id: LOGGER.debug(
            f"Collection {collection_id} created"
        ),
    )
    asyncio.run(run_save(workflow, args.name))

    return from_snapshot(workflow.snapshot, workflow.collection_id)


def collection_suggest(args: argparse.Namespace) -> CommandResult:
    """Suggest a name for an item file without saving anything."""
    try:
        items = load_items(args.items_file)
        name = naming_client.suggest_name(items)
    except (ItemsFileError, TransientServiceError) as e:
        return error(str(e))

    return success(f"Suggested name: {name}", data={"name": name})


def collection_list(args: argparse.Namespace) -> CommandResult:
    """List all collections of an owner."""
    collections = collection_service.list_collections(args.owner)

    if not collections:
        return info(f"No collections found for {args.owner}.")

    rows = [
        [c.name, c.created_at.strftime("%Y-%m-%d %H:%M"), c.id]
        for c in sorted(collections, key=lambda c: c.name)
    ]
    log_table([("Name", 30), ("Created", 16), ("ID", 32)], rows)

    return success()


def collection_show(args: argparse.Namespace) -> CommandResult:
    """Show the items of a collection."""
    collection = collection_service.get_collection(args.owner, args.name)
    if not collection:
        return error(f"Collection '{args.name}' not found")

    items = collection_service.get_collection_items(collection.id)

    LOGGER.info(f"Collection: {collection.name}")
    LOGGER.info(f"Created: {collection.created_at.strftime('%Y-%m-%d %H:%M')}")
    LOGGER.info(f"Total Items: {len(items)}")
    LOGGER.info("")
    log_table(
        [("#", 4), ("Item", 70)],
        [[position, format_item(item)] for position, item in enumerate(items, 1)],
    )

    return success(data=items)


def collection_delete(args: argparse.Namespace) -> CommandResult:
    """Delete a collection and its items."""
    collection = collection_service.get_collection(args.owner, args.name)
    if not collection:
        return error(f"Collection '{args.name}' not found")

    if not args.confirm:
        if not confirm(f"Delete collection '{collection.name}'?"):
            return info("Cancelled")

    if not collection_service.delete_collection(args.owner, args.name):
        return error(f"Collection '{args.name}' not found")

    return success(f"Deleted collection '{collection.name}'")
