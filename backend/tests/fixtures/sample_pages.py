"""
Sample page fixtures for testing.
"""

# 146 characters, inside the 120-160 window
GOOD_DESCRIPTION = ("Fast, friendly plumbing services in Springfield. " * 3).strip()

TEN_LINKS = "\n".join(
    [f'<a href="/page-{i}">Page {i}</a>' for i in range(7)]
    + [
        '<a href="https://example.com/contact">Contact</a>',
        '<a href="https://partner.org/offer">Partner</a>',
        '<a href="https://social.net/share">Share</a>',
    ]
)

# Perfect SEO page - every scored field is good
PERFECT_PAGE_HTML = f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Perfect SEO Page - Complete with All Elements</title>
    <meta name="description" content="{GOOD_DESCRIPTION}">
    <link rel="canonical" href="https://example.com/perfect-page">
    <meta name="robots" content="index, follow">

    <!-- Open Graph -->
    <meta property="og:title" content="Perfect SEO Page">
    <meta property="og:description" content="Optimized for social sharing">
    <meta property="og:image" content="https://example.com/og-image.jpg">
    <meta property="og:url" content="https://example.com/perfect-page">
</head>
<body>
    <h1>Springfield Plumbing</h1>
    <img src="/logo.png" alt="Company logo">
    <img src="/team.jpg" alt="Our team">
    {TEN_LINKS}
</body>
</html>
"""

# Title good (23 chars), short description, one image without alt, ten links
EXAMPLE_PAGE_HTML = f"""
<html>
<head>
    <title>A Great Website For You</title>
    <meta name="description" content="The best website on the internet for all of your everyday needs and more.">
</head>
<body>
    <img src="/hero.png">
    {TEN_LINKS}
</body>
</html>
"""

# Nothing scoreable at all
BARE_PAGE_HTML = """
<html>
<body>
    <p>Hello</p>
</body>
</html>
"""

# Problems everywhere: short title, keywords tag, missing and duplicate alt text
POOR_PAGE_HTML = """
<html>
<head>
    <title>Home</title>
    <meta name="keywords" content="plumbing, springfield, pipes">
    <meta property="og:title" content="Home">
</head>
<body>
    <img src="/a.png" alt="">
    <img src="/b.png">
    <img src="/c.png" alt="pipes">
    <img src="/d.png" alt="pipes">
    <img alt="no source">
</body>
</html>
"""


def page_with_links(count: int, host: str = "example.com") -> str:
    """A page with `count` anchors, alternating internal and external."""
    anchors = []
    for i in range(count):
        if i % 2:
            anchors.append(f'<a href="https://other-{i}.org/">External {i}</a>')
        else:
            anchors.append(f'<a href="https://{host}/p/{i}">Internal {i}</a>')
    return "<html><head><title>Link heavy page for testing</title></head><body>{}</body></html>".format(
        "\n".join(anchors)
    )
