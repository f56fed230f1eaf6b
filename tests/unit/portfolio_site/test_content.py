"""Tests for static site content."""

from portfolio_site.content import BLOG_POSTS, SKILLS, get_blog_post, get_blog_posts


def test_blog_posts_newest_first():
    posts = get_blog_posts()

    assert len(posts) == len(BLOG_POSTS)
    assert [p.published for p in posts] == sorted((p.published for p in posts), reverse=True)


def test_get_blog_post():
    post = get_blog_post(1)

    assert post is not None
    assert post.id == 1
    assert post.body


def test_get_unknown_blog_post():
    assert get_blog_post(9999) is None


def test_skills_listed():
    assert SKILLS
