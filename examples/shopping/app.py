"""Shopping — products and shopping lists served straight from dataclasses.

No templates are written for any of these types. Autoview derives a route
per link type, renders records as headings, lists as tables, and embeds
live searches on the index page.

Demonstrates:
- ``@app.get`` with link dataclasses (``/``, ``/product/{product}``,
  ``/shopping_list/{shopping_list}``)
- ``link()`` for table row and cell anchors
- ``SearchLink`` + ``@app.search`` for htmx search-as-you-type
- ``view_field("table-hide")`` and a self-rendering ``__html__`` value
- ``ResourceNotFound`` for unknown keys

Run:
    python app.py
"""

from dataclasses import dataclass, field

from autoview import App, AppConfig, ResourceNotFound, SearchLink, view_field

app = App(AppConfig(title="Shopping"))


# ---------------------------------------------------------------------------
# Links
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class IndexLink:
    pass


@dataclass(frozen=True)
class ProductLink:
    product: str


@dataclass(frozen=True)
class ShoppingListLink:
    shopping_list: str


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


class Badge:
    def __html__(self) -> str:
        return "<span>this is a test</span>"


@dataclass
class Nutrient:
    name: str
    amount: float


@dataclass
class Product:
    name: str
    description: str
    nutrients: list[Nutrient] = field(default_factory=list)

    def link(self) -> ProductLink:
        return ProductLink(product=self.name)

    def __str__(self) -> str:
        return self.name


@dataclass
class Item:
    product: Product
    quantity: int


@dataclass
class ShoppingList:
    name: str
    description: str
    items: list[Item] = field(default_factory=list)
    badge: Badge = view_field("table-hide", default_factory=Badge)

    def link(self) -> ShoppingListLink:
        return ShoppingListLink(shopping_list=self.name)


@dataclass(frozen=True)
class ShoppingListSearch:
    name: str = view_field("search", default="")


@dataclass(frozen=True)
class ProductSearch:
    name: str = view_field("search", default="")


@dataclass
class Index:
    shopping_lists: SearchLink[ShoppingListSearch]
    product_search: SearchLink[ProductSearch]
    products: list[Product]


# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------

PRODUCTS = {
    "Jarlsberg": Product(
        name="Jarlsberg",
        description="A mild nutty Alpine-style cheese from Norway",
        nutrients=[Nutrient("Cheese", 50), Nutrient("Sugar", 50)],
    ),
    "Kvikk-Lunsj": Product(
        name="Kvikk-Lunsj",
        description="The superior version of KitKat",
    ),
}

SHOPPING_LISTS = {
    "My Shopping List": ShoppingList(
        name="My Shopping List",
        description="Stuff I buy before and after work",
        items=[
            Item(product=PRODUCTS["Jarlsberg"], quantity=10),
            Item(product=PRODUCTS["Kvikk-Lunsj"], quantity=100),
        ],
    ),
    "Not My Shopping List": ShoppingList(
        name="Not My Shopping List",
        description="Stuff I don't buy before and after work",
        items=[
            Item(product=PRODUCTS["Jarlsberg"], quantity=-10),
            Item(product=PRODUCTS["Kvikk-Lunsj"], quantity=-100),
        ],
    ),
}


# ---------------------------------------------------------------------------
# Getters and searches
# ---------------------------------------------------------------------------


@app.get
def index(link: IndexLink) -> Index:
    return Index(
        shopping_lists=SearchLink(ShoppingListSearch()),
        product_search=SearchLink(ProductSearch()),
        products=list(PRODUCTS.values()),
    )


@app.get
def product(link: ProductLink) -> Product:
    found = PRODUCTS.get(link.product)
    if found is None:
        raise ResourceNotFound(f"Product {link.product} not found")
    return found


@app.get
def shopping_list(link: ShoppingListLink) -> ShoppingList:
    found = SHOPPING_LISTS.get(link.shopping_list)
    if found is None:
        raise ResourceNotFound(f"Shopping list {link.shopping_list} not found")
    return found


@app.search
def find_shopping_lists(criteria: ShoppingListSearch) -> list[ShoppingList]:
    term = criteria.name.lower()
    return [item for item in SHOPPING_LISTS.values() if term in item.name.lower()]


@app.search
def find_products(criteria: ProductSearch) -> list[Product]:
    term = criteria.name.lower()
    return [item for item in PRODUCTS.values() if term in item.name.lower()]


if __name__ == "__main__":
    app.run()
