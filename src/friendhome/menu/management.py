"""Menu management — admin commands and handler."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from friendhome.accounts.roles import ensure_admin
from friendhome.domain import friendhome
from friendhome.menu.menu_item import MenuItem

logger = structlog.get_logger(__name__)


@friendhome.command(part_of="MenuItem")
class AddMenuItem:
    actor_id = Identifier(required=True)
    title = String(required=True, max_length=255)
    category = String(required=True, max_length=100)
    price = Float(required=True, min_value=0.0)
    description = Text()


@friendhome.command(part_of="MenuItem")
class UpdateMenuItem:
    actor_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)
    title = String(max_length=255)
    category = String(max_length=100)
    price = Float(min_value=0.0)
    description = Text()


@friendhome.command(part_of="MenuItem")
class ToggleMenuItemAvailability:
    actor_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)


@friendhome.command(part_of="MenuItem")
class AttachMenuImage:
    actor_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)
    image_url = String(required=True, max_length=1024)


@friendhome.command(part_of="MenuItem")
class RemoveMenuImage:
    actor_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)


@friendhome.command_handler(part_of=MenuItem)
class ManageMenuHandler:
    @handle(AddMenuItem)
    def add_menu_item(self, command):
        ensure_admin(command.actor_id)

        item = MenuItem.add(
            title=command.title,
            category=command.category,
            price=command.price,
            description=command.description,
        )
        current_domain.repository_for(MenuItem).add(item)
        logger.info("Menu item added", menu_item_id=str(item.id), title=item.title)
        return str(item.id)

    @handle(UpdateMenuItem)
    def update_menu_item(self, command):
        ensure_admin(command.actor_id)

        repo = current_domain.repository_for(MenuItem)
        item = repo.get(command.menu_item_id)
        item.update_details(
            title=command.title,
            category=command.category,
            price=command.price,
            description=command.description,
        )
        repo.add(item)

    @handle(ToggleMenuItemAvailability)
    def toggle_availability(self, command):
        ensure_admin(command.actor_id)

        repo = current_domain.repository_for(MenuItem)
        item = repo.get(command.menu_item_id)
        item.toggle_availability()
        repo.add(item)
        return item.is_available

    @handle(AttachMenuImage)
    def attach_image(self, command):
        ensure_admin(command.actor_id)

        repo = current_domain.repository_for(MenuItem)
        item = repo.get(command.menu_item_id)
        item.attach_image(command.image_url)
        repo.add(item)

    @handle(RemoveMenuImage)
    def remove_image(self, command):
        ensure_admin(command.actor_id)

        repo = current_domain.repository_for(MenuItem)
        item = repo.get(command.menu_item_id)
        item.remove_image()
        repo.add(item)
