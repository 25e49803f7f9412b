"""Product catalogue maintenance — create, update and delete commands."""

import json

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import logger, storefront


@storefront.command(part_of="Product")
class CreateProduct:
    title = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    discount = Float(default=0.0)
    gender = String(required=True, max_length=10)
    description = Text()
    category = String(max_length=100)
    brand = String(max_length=100)
    image = String(max_length=500)
    stock = Text()  # JSON, shaped by the active inventory mode


@storefront.command(part_of="Product")
class UpdateProductDetails:
    product_id = Identifier(required=True)
    title = String(max_length=255)
    price = Float(min_value=0.0)
    discount = Float()
    gender = String(max_length=10)
    description = Text()
    category = String(max_length=100)
    brand = String(max_length=100)
    image = String(max_length=500)


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        stock = json.loads(command.stock) if isinstance(command.stock, str) else command.stock
        product = Product.create(
            title=command.title,
            price=command.price,
            discount=command.discount,
            gender=command.gender,
            description=command.description,
            category=command.category,
            brand=command.brand,
            image=command.image,
            stock=stock,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProductDetails)
    def update_product_details(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            title=command.title,
            price=command.price,
            discount=command.discount,
            gender=command.gender,
            description=command.description,
            category=command.category,
            brand=command.brand,
            image=command.image,
        )
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
        logger.info("product_deleted", product_id=str(command.product_id))
