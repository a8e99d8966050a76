"""Order commands."""

import click

from relstore.cli.error_handling import handle_domain_error
from relstore.domain.orders import OrderService


@click.group()
def order_group():
    """Manage orders and their product lines."""
    pass


@order_group.command("create")
@click.option("--reference", type=str, help="Order reference")
@click.pass_context
def create_order(ctx, reference: str | None):
    """Create a new order."""
    service = OrderService(ctx.obj["store"])

    try:
        order_id = service.create_order(reference)
        click.echo(f"Created order (ID: {order_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@order_group.command("create-product")
@click.argument("name")
@click.pass_context
def create_product(ctx, name: str):
    """Create a new product."""
    service = OrderService(ctx.obj["store"])

    try:
        product_id = service.create_product(name)
        click.echo(f"Created product '{name}' (ID: {product_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@order_group.command("add-product")
@click.argument("order_id", type=int)
@click.argument("product_id", type=int)
@click.option("--quantity", type=int, default=1, show_default=True, help="Units ordered")
@click.pass_context
def add_product(ctx, order_id: int, product_id: int, quantity: int):
    """Add a product line to an order."""
    service = OrderService(ctx.obj["store"])

    try:
        service.add_product(order_id, product_id, quantity)
        click.echo(f"Added product {product_id} to order {order_id} (quantity {quantity})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@order_group.command("set-quantity")
@click.argument("order_id", type=int)
@click.argument("product_id", type=int)
@click.argument("quantity", type=int)
@click.pass_context
def set_quantity(ctx, order_id: int, product_id: int, quantity: int):
    """Change the quantity of an order line."""
    service = OrderService(ctx.obj["store"])

    try:
        service.set_quantity(order_id, product_id, quantity)
        click.echo(f"Order {order_id} now has {quantity} of product {product_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@order_group.command("show")
@click.argument("order_id", type=int)
@click.pass_context
def show_order(ctx, order_id: int):
    """List the products on an order."""
    service = OrderService(ctx.obj["store"])

    try:
        products = service.products(order_id)
        lines = [service.get_join(order_id, product.id) for product in products]
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not products:
        click.echo("No products on this order.")
        return

    click.echo(f"{'ID':<6} {'Product':<30} {'Qty':>5}")
    click.echo("-" * 43)
    for product, line in zip(products, lines):
        click.echo(f"{product.id:<6} {(product.name or ''):<30} {line.quantity:>5}")


def register_commands(cli):
    """Register order commands with main CLI."""
    cli.add_command(order_group, name="order")
