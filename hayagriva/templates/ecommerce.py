from __future__ import annotations

from hayagriva.core.fragments import CodeWriter
from hayagriva.core.protocol import AppType
from hayagriva.templates.base import CARD_DECLARATIONS, AppTemplate, TemplateContext, write_card_grid_rule

PRODUCTS = [
    {"id": 1, "name": "Classic Tee", "price": 24.99, "category": "Apparel"},
    {"id": 2, "name": "Canvas Tote", "price": 18.5, "category": "Accessories"},
    {"id": 3, "name": "Ceramic Mug", "price": 12.0, "category": "Home"},
    {"id": 4, "name": "Desk Lamp", "price": 39.99, "category": "Home"},
    {"id": 5, "name": "Notebook Set", "price": 9.99, "category": "Stationery"},
    {"id": 6, "name": "Water Bottle", "price": 21.0, "category": "Outdoors"},
]


class EcommerceTemplate(AppTemplate):
    app_type = AppType.ECOMMERCE
    loading_label = "store"
    handled_features = frozenset({"Search & Filtering", "Payments"})

    def write_state(self, ctx: TemplateContext, w: CodeWriter) -> None:
        w.line("const [cart, setCart] = useState([]);")
        if ctx.has("Payments"):
            w.line("const [orderPlaced, setOrderPlaced] = useState(false);")
        w.blank()
        w.const_array("products", PRODUCTS)
        w.blank()
        if ctx.has("Search & Filtering"):
            w.line(
                "const visibleProducts = products.filter((product) => "
                "product.name.toLowerCase().includes(query.toLowerCase()));"
            )
        else:
            w.line("const visibleProducts = products;")
        w.line("const cartTotal = cart.reduce((total, item) => total + item.price, 0);")

    def write_handlers(self, ctx: TemplateContext, w: CodeWriter) -> None:
        w.blank()
        w.line("const addToCart = (product) => setCart([...cart, product]);")
        if ctx.has("Payments"):
            w.blank()
            with w.block("const handleCheckout = () => {", "};"):
                w.line("setOrderPlaced(true);")
                w.line("setCart([]);")

    def write_main(self, ctx: TemplateContext, w: CodeWriter) -> None:
        with w.element("div", 'className="store-header"'):
            w.leaf("h2", "Featured Products")
            if ctx.has("Search & Filtering"):
                w.void(
                    "Input",
                    'placeholder="Search products..." value={query} onChange={(e) => setQuery(e.target.value)}'
                    + ctx.aria('aria-label="Search products"'),
                )

        with w.element("div", 'className="card-grid product-grid"'):
            with w.each("visibleProducts", "product"):
                with w.element("div", 'key={product.id} className="product-card"'):
                    w.leaf("div", "", 'className="product-image"')
                    w.leaf("h3", "{product.name}")
                    w.leaf("p", "{product.category}", 'className="product-category"')
                    w.leaf("p", "${product.price.toFixed(2)}", 'className="product-price"')
                    w.leaf("Button", "Add to Cart", 'className="add-to-cart" onClick={() => addToCart(product)}')

        with w.element("aside", 'className="cart-summary"' + ctx.aria('aria-live="polite"')):
            w.leaf("h3", "Cart ({cart.length})")
            w.leaf("p", "Total: ${cartTotal.toFixed(2)}")
            if ctx.has("Payments"):
                w.leaf("Button", "Checkout", "onClick={handleCheckout} disabled={cart.length === 0}")
                w.line('{orderPlaced && <p className="order-confirmation">Order placed. Thank you!</p>}')

    def write_styles(self, ctx: TemplateContext, w: CodeWriter) -> None:
        w.rule(
            ".store-header",
            {"display": "flex", "justify-content": "space-between", "align-items": "center", "gap": "1rem", "margin-bottom": "2rem"},
        )
        w.blank()
        write_card_grid_rule(w, ".product-grid", "220px")
        w.rule(".product-card", dict(CARD_DECLARATIONS, **{"display": "flex", "flex-direction": "column"}))
        w.blank()
        w.rule(
            ".product-image",
            {"height": "160px", "border-radius": "4px", "background-color": "var(--color-muted)", "margin-bottom": "1rem"},
        )
        w.blank()
        w.rule(".product-category", {"font-size": "0.875rem", "opacity": "0.7", "margin": "0"})
        w.blank()
        w.rule(".product-price", {"font-weight": "600", "color": "var(--color-primary)"})
        w.blank()
        w.rule(".add-to-cart", {"margin-top": "auto"})
        w.blank()
        w.rule(".cart-summary", dict(CARD_DECLARATIONS, **{"max-width": "360px"}))
        w.blank()
        w.rule(".order-confirmation", {"color": "#38b000", "font-weight": "600"})
        w.blank()


template = EcommerceTemplate()
