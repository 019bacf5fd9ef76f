# cli.py
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.text import Text
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle
from pydantic import ValidationError

from app.models import CartItem, InventoryStatus
from sdk.cart import get_cart_service
from sdk.contact import ContactFormError, MAX_MESSAGE_LENGTH, submit_contact
from sdk.shop import ShopClient

console = Console()
c = ShopClient()
cart = get_cart_service()

# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []
cart_badge = 0

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})

STATUS_STYLES = {
    InventoryStatus.INSTOCK.value: "green",
    InventoryStatus.LOWSTOCK.value: "yellow",
    InventoryStatus.OUTOFSTOCK.value: "red",
}


def _as_number(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def format_price(value: Any) -> str:
    # the catalog accepts any JSON, so a price is not always a number
    number = _as_number(0 if value is None else value)
    return f"${number:.2f}" if number is not None else str(value)


def _on_cart_change(items: List[CartItem]):
    global cart_badge
    cart_badge = sum(item.quantity for item in items)


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Products Catalog",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=6)
    table.add_column("Code", width=11)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=14)
    table.add_column("Status", width=11)
    table.add_column("Rating", justify="right", width=6)

    for p in products:
        status = str(p.get("inventoryStatus", "N/A"))
        style = STATUS_STYLES.get(status, "white")
        table.add_row(
            str(p.get("id", "N/A")),
            str(p.get("code", "")),
            str(p.get("name", "N/A")),
            format_price(p.get("price")),
            str(p.get("category", "")),
            f"[{style}]{status}[/{style}]",
            str(p.get("rating", "-")),
        )
    console.print(table)


def show_product(p: Dict[str, Any]):
    body = Text()
    body.append(f"{p.get('name', 'N/A')}\n", style="bold")
    body.append(f"{p.get('description', '')}\n\n")
    body.append(f"Price: {format_price(p.get('price'))}   ", style="green")
    body.append(f"Stock: {p.get('quantity', 0)} ({p.get('inventoryStatus', 'N/A')})   ")
    body.append(f"Category: {p.get('category', '')}")
    console.print(Panel(body, title=f"#{p.get('id')} {p.get('code', '')}", border_style="cyan"))


def show_cart():
    items = cart.items
    title = Text()
    title.append("🛒 Shopping Cart", style="bold")
    title.append(f" - {cart.get_item_count()} item(s)", style="bold cyan")
    title.append(f" - Total: ${cart.get_total():.2f}", style="bold green")

    if not items:
        console.print(Panel("Your cart is empty 🛍️", title=title, style="blue"))
        return

    table = Table(box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("ID", style="dim", width=6)
    table.add_column("Product", style="bold", width=30)
    table.add_column("Qty", justify="right", width=8)
    table.add_column("Price", justify="right", width=12)
    table.add_column("Subtotal", justify="right", width=12)

    for it in items:
        table.add_row(
            str(it.id),
            it.name,
            str(it.quantity),
            f"${it.price:.2f}",
            f"${it.price * it.quantity:.2f}"
        )

    console.print(Panel(table, title=title, border_style="blue"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper with enhanced exception handling
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner and returns its result.
    Errors are reported in the status panel and turned into None.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


# ---------------------------
# Autocompletion helpers
# ---------------------------
def get_product_completer():
    global product_cache
    if not product_cache:
        product_cache = try_api(c.list_products) or []
    return WordCompleter([str(p.get("id", "")) for p in product_cache], ignore_case=True)


def get_cart_completer():
    return WordCompleter([str(item.id) for item in cart.items])


# ---------------------------
# Layout and Header
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        f"🛍️ Shop  [cyan]🛒 {cart_badge}[/cyan]",
        "[bold blue]Catalog & Cart[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_int(message: str, completer=None) -> Optional[int]:
    raw = prompt_with_autocomplete(message, completer=completer).strip()
    try:
        return int(raw)
    except ValueError:
        console.print("[red]Please enter a numeric id.[/red]")
        return None


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_product_fields(current: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Prompt for product fields, pre-filled from ``current`` when editing."""
    current = current or {}
    statuses = [s.value for s in InventoryStatus]
    fields: Dict[str, Any] = {
        "code": prompt_with_autocomplete("Code", default=str(current.get("code", ""))),
        "name": prompt_with_autocomplete("Name", default=str(current.get("name", ""))),
        "description": prompt_with_autocomplete("Description", default=str(current.get("description", ""))),
        "price": ask_float("💰 Price", default=_as_number(current.get("price")) or 0.0),
        "quantity": IntPrompt.ask("📦 Stock quantity", default=int(current.get("quantity", 0) or 0)),
        "inventoryStatus": Prompt.ask("Status", choices=statuses,
                                      default=str(current.get("inventoryStatus", statuses[0]))),
        "category": prompt_with_autocomplete("🏷️ Category", default=str(current.get("category", ""))),
        "image": prompt_with_autocomplete("Image", default=str(current.get("image", ""))),
        "rating": ask_float("⭐ Rating", default=_as_number(current.get("rating")) or 0.0),
    }
    if current:
        return {k: v for k, v in fields.items() if current.get(k) != v}
    return fields


def add_product_to_cart(product: Dict[str, Any]) -> str:
    """Add a catalog record to the cart and return the status line to show."""
    try:
        cart.add_to_cart(product)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) or "product" for err in e.errors())
        return f"Error: cannot add product {product.get('id')} to cart (invalid {fields})"
    return f"Added {product.get('name', product.get('id'))} to cart"


def change_quantity(product_id: int, quantity: int):
    if quantity > 0:
        cart.update_quantity(product_id, quantity)
    else:
        cart.remove_from_cart(product_id)


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message, product_cache

    cart.subscribe(_on_cart_change)
    console.clear()
    console.print(create_header())

    # Preload products for autocomplete
    product_cache = try_api(c.list_products) or []

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "7", "🧹 Clear cart"),
            ("2", "ℹ️ Product details", "8", "✉️ Contact us"),
            ("3", "🛒 Add to cart", "9", "➕ Create product"),
            ("4", "👀 View cart", "10", "✏️ Edit product"),
            ("5", "🔢 Change quantity", "11", "🗑️ Delete product"),
            ("6", "➖ Remove from cart", "q", "👋 Quit"),
        ]

        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title=f"📋 Menu  (cart: {cart_badge})", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 12)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Products loaded successfully")
            if products is not None:
                product_cache = products
                show_products(products)

        elif choice == "2":
            pid = ask_int("Enter product ID", completer=get_product_completer())
            if pid is not None:
                resp = try_api(c.get_product, pid, success_msg=f"Product {pid} details loaded")
                if resp:
                    show_product(resp)

        elif choice == "3":
            pid = ask_int("Enter product ID", completer=get_product_completer())
            if pid is not None:
                product = try_api(c.get_product, pid)
                if product:
                    status_message = add_product_to_cart(product)
                    show_cart()

        elif choice == "4":
            show_cart()

        elif choice == "5":
            pid = ask_int("Enter product ID", completer=get_cart_completer())
            if pid is not None:
                qty = IntPrompt.ask("New quantity (0 removes the item)", default=1)
                change_quantity(pid, qty)
                status_message = f"Quantity of product {pid} set to {qty}"
                show_cart()

        elif choice == "6":
            pid = ask_int("Enter product ID", completer=get_cart_completer())
            if pid is not None:
                cart.remove_from_cart(pid)
                status_message = f"Product {pid} removed from cart"
                show_cart()

        elif choice == "7":
            if Confirm.ask("Empty the cart?"):
                cart.clear_cart()
                status_message = "Cart cleared"

        elif choice == "8":
            email = prompt_with_autocomplete("Your email")
            message = prompt_with_autocomplete(f"Message (max {MAX_MESSAGE_LENGTH} chars)")
            try:
                status_message = submit_contact({"email": email, "message": message})
            except ContactFormError as e:
                status_message = f"Error: {e}"

        elif choice == "9":
            fields = ask_product_fields()
            resp = try_api(c.create_product, fields, success_msg=f"Product '{fields['name']}' created")
            if resp:
                console.print(Panel(f"Created product: [green]{resp['id']}[/green]"))
                product_cache = try_api(c.list_products) or []

        elif choice == "10":
            pid = ask_int("Enter product ID", completer=get_product_completer())
            current = try_api(c.get_product, pid) if pid is not None else None
            if current:
                changes = ask_product_fields(current)
                if not changes:
                    status_message = "Nothing changed"
                else:
                    resp = try_api(c.patch_product, pid, changes, success_msg=f"Product {pid} updated")
                    if resp:
                        show_product(resp)
                        product_cache = try_api(c.list_products) or []

        elif choice == "11":
            pid = ask_int("Enter product ID", completer=get_product_completer())
            if pid is not None and Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                product_cache = try_api(c.list_products) or []

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Thank you for shopping! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n\n[bold red]Unexpected error: {e}[/bold red]")
        sys.exit(1)
