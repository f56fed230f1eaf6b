"""Static site content: blog posts and the skills strip on the home page."""

from datetime import date

from portfolio_site.models.blog import BlogPost

SKILLS = [
    "Node.js",
    "React",
    "Redux",
    "JavaScript",
    "TypeScript",
    "Go",
    "Express.js",
    "Vue.js",
    "Bootstrap",
    "HTML5",
    "Firebase",
    "MongoDB",
    "PostgreSQL",
    "Python",
]

BLOG_POSTS: list[BlogPost] = [
    BlogPost(
        id=1,
        title="Getting Started with Next.js",
        summary="Learn how to build modern web applications with a powerful React framework.",
        published=date(2024, 10, 1),
        reading_time="1 min read",
        body=(
            "Next.js is a popular React framework for building server-rendered and statically "
            "generated web applications. This post walks through the basics: creating pages, "
            "routing between them and deploying the result. By the end you should be comfortable "
            "using Next.js to ship fast, SEO-friendly sites, whether you are new to React or have "
            "been using it for years."
        ),
    ),
    BlogPost(
        id=2,
        title="Mastering TypeScript",
        summary="Dig into TypeScript and learn to write sturdier, easier to maintain code.",
        published=date(2024, 10, 1),
        reading_time="1 min read",
        body=(
            "TypeScript is a typed superset of JavaScript that compiles to plain JavaScript. "
            "It brings better tooling, higher code quality and more productive teams. This guide "
            "covers static typing, interfaces and generics, then looks at how to introduce "
            "TypeScript into an existing JavaScript project and lean on the type system to catch "
            "mistakes early."
        ),
    ),
    BlogPost(
        id=3,
        title="Go for Backend Development",
        summary="Why Go is a good fit for efficient, scalable backend services.",
        published=date(2024, 10, 1),
        reading_time="1 min read",
        body=(
            "Go, also known as Golang, is a statically typed, compiled language designed at "
            "Google. Its simplicity, performance and built-in concurrency have made it a popular "
            "backend choice. We look at the standard library's support for serving HTTP, handling "
            "JSON and talking to databases, and at the goroutine model that lets one service "
            "handle many tasks at once."
        ),
    ),
]


def get_blog_posts() -> list[BlogPost]:
    """All posts, newest first (ties keep their listed order)."""
    return sorted(BLOG_POSTS, key=lambda post: post.published, reverse=True)


def get_blog_post(post_id: int) -> BlogPost | None:
    return next((post for post in BLOG_POSTS if post.id == post_id), None)
