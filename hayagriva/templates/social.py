from __future__ import annotations

from hayagriva.core.fragments import CodeWriter
from hayagriva.core.protocol import AppType
from hayagriva.templates.base import CARD_DECLARATIONS, AppTemplate, TemplateContext

INITIAL_POSTS = [
    {"id": 3, "author": "Asha", "text": "Just finished a sunrise hike. Worth every step.", "likes": 12},
    {"id": 2, "author": "Ravi", "text": "Anyone up for a board game night this Friday?", "likes": 5},
    {"id": 1, "author": "Meera", "text": "New blog post is live, feedback welcome.", "likes": 8},
]


class SocialTemplate(AppTemplate):
    app_type = AppType.SOCIAL
    loading_label = "feed"

    def write_state(self, ctx: TemplateContext, w: CodeWriter) -> None:
        w.blank()
        w.const_array("initialPosts", INITIAL_POSTS)
        w.blank()
        w.line("const [feed, setFeed] = useState(initialPosts);")
        w.line("const [postDraft, setPostDraft] = useState('');")

    def write_handlers(self, ctx: TemplateContext, w: CodeWriter) -> None:
        w.blank()
        with w.block("const publishPost = () => {", "};"):
            w.line("if (!postDraft.trim()) return;")
            w.line("setFeed([{ id: feed.length + 1, author: 'You', text: postDraft, likes: 0 }, ...feed]);")
            w.line("setPostDraft('');")
        w.blank()
        w.line(
            "const likePost = (id) => "
            "setFeed(feed.map((post) => (post.id === id ? { ...post, likes: post.likes + 1 } : post)));"
        )

    def write_main(self, ctx: TemplateContext, w: CodeWriter) -> None:
        with w.element("section", 'className="composer"'):
            w.leaf("h2", "Home Feed")
            w.void(
                "textarea",
                'placeholder="Share something..." value={postDraft} onChange={(e) => setPostDraft(e.target.value)}'
                + ctx.aria('aria-label="New post"'),
            )
            w.leaf("Button", "Post", "onClick={publishPost}")

        with w.element("div", 'className="feed"'):
            with w.each("feed", "post"):
                with w.element("div", 'key={post.id} className="post-card"'):
                    with w.element("div", 'className="post-author"'):
                        w.leaf("div", "{post.author.charAt(0)}", 'className="avatar"')
                        w.leaf("strong", "{post.author}")
                    w.leaf("p", "{post.text}")
                    w.leaf("Button", "Like ({post.likes})", 'variant="ghost" onClick={() => likePost(post.id)}')

        with w.element("aside", 'className="profile-card"'):
            w.leaf("h3", "Your Profile")
            w.leaf("p", "{feed.filter((post) => post.author === 'You').length} posts")

    def write_styles(self, ctx: TemplateContext, w: CodeWriter) -> None:
        w.rule(".composer", dict(CARD_DECLARATIONS, **{"display": "flex", "flex-direction": "column", "gap": "0.75rem"}))
        w.blank()
        w.rule(
            ".composer textarea",
            {"min-height": "80px", "padding": "0.5rem", "border": "1px solid var(--color-border)", "border-radius": "4px"},
        )
        w.blank()
        w.rule(".feed", {"display": "flex", "flex-direction": "column", "gap": "1rem", "margin": "2rem 0"})
        w.blank()
        w.rule(".post-card", CARD_DECLARATIONS)
        w.blank()
        w.rule(".post-author", {"display": "flex", "align-items": "center", "gap": "0.5rem"})
        w.blank()
        w.rule(
            ".avatar",
            {
                "width": "36px",
                "height": "36px",
                "border-radius": "50%",
                "background-color": "var(--color-primary)",
                "color": "#ffffff",
                "display": "flex",
                "align-items": "center",
                "justify-content": "center",
            },
        )
        w.blank()
        w.rule(".profile-card", dict(CARD_DECLARATIONS, **{"max-width": "320px"}))
        w.blank()


template = SocialTemplate()
