from __future__ import annotations

from hayagriva.core.fragments import CodeWriter
from hayagriva.core.protocol import AppType
from hayagriva.templates.base import CARD_DECLARATIONS, AppTemplate, TemplateContext, write_card_grid_rule

ARTICLES = [
    {
        "id": 1,
        "title": "Getting Started",
        "excerpt": "A short guide to setting up your first project.",
        "author": "Asha",
        "date": "2024-05-12",
        "comments": 4,
    },
    {
        "id": 2,
        "title": "Designing for Everyone",
        "excerpt": "Practical notes on building interfaces that work for all readers.",
        "author": "Ravi",
        "date": "2024-05-20",
        "comments": 7,
    },
    {
        "id": 3,
        "title": "Shipping Small",
        "excerpt": "Why frequent, focused releases keep a product healthy.",
        "author": "Meera",
        "date": "2024-06-02",
        "comments": 2,
    },
]


class BlogTemplate(AppTemplate):
    app_type = AppType.BLOG
    loading_label = "articles"
    handled_features = frozenset({"Search & Filtering"})

    def write_state(self, ctx: TemplateContext, w: CodeWriter) -> None:
        w.line("const [selected, setSelected] = useState(null);")
        w.blank()
        w.const_array("articles", ARTICLES)
        w.blank()
        if ctx.has("Search & Filtering"):
            w.line(
                "const visibleArticles = articles.filter((article) => "
                "article.title.toLowerCase().includes(query.toLowerCase()));"
            )
        else:
            w.line("const visibleArticles = articles;")

    def write_main(self, ctx: TemplateContext, w: CodeWriter) -> None:
        with w.element("section", 'className="featured-post"'):
            w.leaf("h2", "Latest Stories")
            w.leaf("p", "Fresh writing from our authors.")
            if ctx.has("Search & Filtering"):
                w.void(
                    "Input",
                    'placeholder="Search articles..." value={query} onChange={(e) => setQuery(e.target.value)}'
                    + ctx.aria('aria-label="Search articles"'),
                )

        with w.element("div", 'className="card-grid article-grid"'):
            with w.each("visibleArticles", "article"):
                with w.element("article", 'key={article.id} className="article-card"'):
                    w.leaf("h3", "{article.title}")
                    w.leaf("p", "{article.author} &middot; {article.date}", 'className="article-meta"')
                    w.leaf("p", "{article.excerpt}")
                    w.leaf("Button", "Read more", 'variant="link" onClick={() => setSelected(article)}')

        with w.block("{selected && (", ")}"):
            with w.element("article", 'className="post-content"'):
                w.leaf("h2", "{selected.title}")
                w.leaf("p", "{selected.excerpt}")
                w.leaf("p", "{selected.comments} comments", 'className="comment-count"')
                w.leaf("Button", "Back to list", 'variant="outline" onClick={() => setSelected(null)}')

    def write_styles(self, ctx: TemplateContext, w: CodeWriter) -> None:
        w.rule(".featured-post", {"margin-bottom": "2rem"})
        w.blank()
        write_card_grid_rule(w, ".article-grid", "280px")
        w.rule(".article-card", CARD_DECLARATIONS)
        w.blank()
        w.rule(".article-meta", {"font-size": "0.875rem", "opacity": "0.7"})
        w.blank()
        w.rule(".post-content", dict(CARD_DECLARATIONS, **{"line-height": "1.7"}))
        w.blank()
        w.rule(".comment-count", {"font-size": "0.875rem", "color": "var(--color-secondary)"})
        w.blank()


template = BlogTemplate()
