"""Jinja2 page templates for the static site."""

STYLE = """
        :root {
            --bg: #1c1c1e;
            --surface: #242428;
            --surface-hover: #2c2c32;
            --border: rgba(255, 255, 255, 0.1);
            --text: #ededed;
            --text-muted: #9a9aa2;
            --accent: #ffffff;
            --accent-dim: rgba(255, 255, 255, 0.08);
        }

        * { margin: 0; padding: 0; box-sizing: border-box; }

        body {
            font-family: 'Geist', system-ui, sans-serif;
            background: var(--bg);
            color: var(--text);
            min-height: 100vh;
            display: flex;
            flex-direction: column;
        }

        a { color: inherit; }

        header {
            position: sticky;
            top: 0;
            z-index: 10;
            backdrop-filter: blur(8px);
            background: rgba(28, 28, 30, 0.6);
            border-bottom: 1px solid var(--border);
        }

        .header-inner, main, .footer-inner {
            max-width: 1200px;
            margin: 0 auto;
            width: 100%;
            padding: 0 1.5rem;
        }

        .header-inner {
            height: 4rem;
            display: flex;
            align-items: center;
            justify-content: space-between;
        }

        .brand { font-weight: 700; letter-spacing: 0.05em; text-transform: uppercase; font-size: 1.25rem; text-decoration: none; }

        nav a { text-decoration: none; opacity: 0.9; margin-left: 1.25rem; }
        nav a:hover { opacity: 1; }

        main { flex: 1; padding-top: 2rem; padding-bottom: 2rem; }

        h1 { font-size: 1.5rem; font-weight: 700; margin-bottom: 1rem; }
        h2 { font-size: 1.1rem; font-weight: 600; margin: 1.5rem 0 0.75rem; }

        .muted { color: var(--text-muted); }
        .pre-line { white-space: pre-line; }
        .pre-wrap { white-space: pre-wrap; }

        .chips { display: flex; gap: 0.5rem; flex-wrap: wrap; margin: 1rem 0; }

        .filter-btn {
            background: var(--surface);
            border: 1px solid var(--border);
            color: var(--text-muted);
            padding: 0.4rem 0.9rem;
            border-radius: 30px;
            font-size: 0.8rem;
            cursor: pointer;
            transition: all 0.2s;
        }

        .filter-btn:hover, .filter-btn.active {
            background: var(--accent-dim);
            border-color: var(--accent);
            color: var(--accent);
        }

        .year-row { border-top: 1px solid var(--border); padding-top: 0.5rem; }
        .row-scroller { display: flex; gap: 1rem; overflow-x: auto; padding: 0.5rem 0; scroll-snap-type: x proximity; }

        .card { display: block; width: 15rem; flex-shrink: 0; text-decoration: none; scroll-snap-align: start; }
        .card-grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(260px, 1fr)); gap: 1rem; }
        .card-grid .card { width: auto; }

        .poster {
            aspect-ratio: 4 / 5;
            background: var(--surface);
            border-radius: 4px;
            overflow: hidden;
            display: flex;
            align-items: center;
            justify-content: center;
        }

        .poster img { width: 100%; height: 100%; object-fit: cover; }
        .poster .coming-soon { font-weight: 600; letter-spacing: 0.2em; text-transform: uppercase; opacity: 0.9; }

        .card-title { margin-top: 0.5rem; font-size: 0.9rem; }
        .card-meta { font-size: 0.75rem; color: var(--text-muted); }

        .project { display: grid; grid-template-columns: 1fr; gap: 1.5rem; }
        @media (min-width: 1024px) { .project { grid-template-columns: 1fr 1fr; } }
        .project .poster { height: 8cm; margin: 0 auto; }

        .gallery { display: flex; gap: 1rem; overflow-x: auto; scroll-snap-type: x mandatory; }
        .gallery img { height: 14rem; border-radius: 4px; scroll-snap-align: start; }

        .video { position: relative; width: 100%; padding-top: 56.25%; }
        .video iframe, .video video { position: absolute; inset: 0; width: 100%; height: 100%; border: 0; }
        .embed { border: 1px solid var(--border); border-radius: 4px; padding: 0.5rem; background: rgba(0, 0, 0, 0.2); }
        .instagram { position: relative; display: block; padding-top: 177.78%; background: #000; border-radius: 4px; overflow: hidden; }
        .instagram img { position: absolute; inset: 0; width: 100%; height: 100%; object-fit: cover; }
        .instagram .play { position: absolute; inset: 0; display: flex; align-items: center; justify-content: center; font-size: 2rem; }

        .socials { display: flex; gap: 0.75rem; margin-top: 1rem; }
        .socials a { padding: 0.5rem 0.9rem; border: 1px solid var(--border); border-radius: 12px; text-decoration: none; }

        .docs { display: grid; grid-template-columns: 14rem 1fr; gap: 2rem; }
        .docs-nav a { display: block; padding: 0.35rem 0.75rem; border-radius: 8px; text-decoration: none; color: var(--text-muted); font-size: 0.85rem; }
        .docs-nav a.active { background: var(--accent-dim); color: var(--text); }
        .doc p { color: var(--text-muted); line-height: 1.8; margin-bottom: 1.25rem; }
        .doc h3 { margin: 2.5rem 0 1rem; }
        .doc pre { background: rgba(0, 0, 0, 0.5); border: 1px solid var(--border); border-radius: 8px; padding: 0.75rem 1rem; margin-bottom: 1.25rem; overflow-x: auto; }
        .doc .tip { border: 1px solid var(--border); border-radius: 8px; padding: 0.75rem 1rem; margin-bottom: 1.25rem; font-size: 0.85rem; color: var(--text-muted); }
        .doc ol { margin: 0 0 1.25rem 1.5rem; color: var(--text-muted); line-height: 1.75; }
        .doc table { width: 100%; border-collapse: collapse; margin-bottom: 1.25rem; font-size: 0.85rem; }
        .doc th, .doc td { border-bottom: 1px solid var(--border); padding: 0.5rem; text-align: left; }
        .on-this-page a { display: block; font-size: 0.8rem; color: var(--text-muted); text-decoration: none; margin: 0.25rem 0; }
        .pager { display: flex; justify-content: space-between; border-top: 1px solid var(--border); margin-top: 3rem; padding-top: 1.5rem; }

        details { border-bottom: 1px solid var(--border); padding: 1rem 0; }
        summary { cursor: pointer; font-size: 1.05rem; }
        details p { color: var(--text-muted); margin-top: 0.75rem; line-height: 1.6; }

        .button { display: inline-block; padding: 0.8rem 2rem; border-radius: 999px; border: 1px solid var(--border); text-decoration: none; font-weight: 600; margin-right: 0.75rem; }
        .button.primary { background: #fff; color: #000; }

        footer { border-top: 1px solid var(--border); }
        .footer-inner { padding-top: 1.5rem; padding-bottom: 1.5rem; font-size: 0.85rem; display: flex; justify-content: space-between; }
"""

BASE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{% if page_title %}{{ page_title }} – {% endif %}{{ owner }} – Sound Design Portfolio</title>
    <meta name="description" content="Responsive portfolio with projects, about, and contact.">
    {% if base_url %}<link rel="canonical" href="{{ base_url }}{{ path }}">{% endif %}
    <style>{{ style | safe }}</style>
</head>
<body>
    <header>
        <div class="header-inner">
            <a class="brand" href="/">{{ owner }}</a>
            <nav>
                <a href="/projects/">Projects</a>
                <a href="/about/">About</a>
                <a href="/contact/">Contact</a>
                <a href="/sonidata-support/">Sonidata</a>
            </nav>
        </div>
    </header>
    <main>
{% block content %}{% endblock %}
    </main>
    <footer>
        <div class="footer-inner">
            <span>© {{ year }} {{ owner }}</span>
            <span>
                {% for key, label in footer_links %}<a href="{{ contact_links[key] }}" target="_blank" rel="noreferrer">{{ label }}</a> {% endfor %}
            </span>
        </div>
    </footer>
{% block scripts %}{% endblock %}
</body>
</html>
"""

CARD = """{% macro card(p) -%}
<a class="card" href="/projects/{{ p.slug }}/">
    <div class="poster">
        {% if p.poster %}<img src="{{ p.poster }}" alt="{{ p.title }}" loading="lazy">{% else %}<span class="coming-soon">Coming soon</span>{% endif %}
    </div>
    <div class="card-title">{{ p.title }}</div>
    <div class="card-meta">{{ p.meta_line }}</div>
</a>
{%- endmacro %}
"""

HOME = """{% extends "base.html" %}
{% from "card.html" import card %}
{% block content %}
<div style="display: flex; justify-content: space-between; align-items: center;">
    <h1>Featured</h1>
    <a class="button" href="/projects/">Show all projects</a>
</div>
<p class="muted pre-line">{{ intro }}</p>
<div class="card-grid" style="margin-top: 1.5rem;">
    {% for p in featured %}{{ card(p) }}{% endfor %}
</div>
{% endblock %}
"""

PROJECTS = """{% extends "base.html" %}
{% from "card.html" import card %}
{% block content %}
<h1>Projects</h1>
<p class="muted">Browse the full list. Filter by role to narrow down the view.</p>
<div class="chips" id="role-filters">
    <button type="button" class="filter-btn active" data-role="" aria-pressed="true">All</button>
    {% for role in roles %}<button type="button" class="filter-btn" data-role="{{ role }}" aria-pressed="false">{{ role }}</button>
    {% endfor %}
</div>
{% for role, rows in layouts %}
<div class="layout" data-layout="{{ role }}"{% if role %} hidden{% endif %}>
    {% for label, projects in rows %}
    <section class="year-row">
        <h2>{{ label }}</h2>
        <div class="row-scroller" role="region" aria-label="Projects {{ label }}">
            {% for p in projects %}{{ card(p) }}{% endfor %}
        </div>
    </section>
    {% endfor %}
</div>
{% endfor %}
{% endblock %}
{% block scripts %}
<script>
    const filters = document.getElementById('role-filters');
    filters.addEventListener('click', (e) => {
        const btn = e.target.closest('.filter-btn');
        if (!btn) return;
        const current = filters.querySelector('.filter-btn.active');
        const role = (current === btn) ? '' : btn.dataset.role;
        filters.querySelectorAll('.filter-btn').forEach(b => {
            const on = b.dataset.role === role;
            b.classList.toggle('active', on);
            b.setAttribute('aria-pressed', on);
        });
        document.querySelectorAll('.layout').forEach(el => {
            el.hidden = el.dataset.layout !== role;
        });
    });
</script>
{% endblock %}
"""

PROJECT = """{% extends "base.html" %}
{% block content %}
<article class="project">
    <div>
        <div class="poster">
            {% if project.poster %}<img src="{{ project.poster }}" alt="{{ project.title }}">{% endif %}
        </div>
    </div>
    <div>
        <h1>{{ project.title }}</h1>
        <div class="muted">{{ project.meta_line }}</div>
        {% if project.content %}<div class="pre-wrap" style="margin-top: 0.75rem; font-size: 0.9rem;">{{ project.content }}</div>{% endif %}
    </div>
    {% if project.images %}
    <div class="gallery">
        {% for src in project.images %}<a href="{{ src }}"><img src="{{ src }}" alt="{{ project.title }} image {{ loop.index }}" loading="lazy"></a>{% endfor %}
    </div>
    {% endif %}
    <div>
    {% if media == "url" %}
        <div class="video">
            <iframe src="{{ project.video_url }}" allow="accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; picture-in-picture" allowfullscreen title="Project video"></iframe>
        </div>
    {% elif media == "video" %}
        <div class="video">
            <video src="{{ project.video_url }}" controls playsinline preload="metadata"{% if project.poster %} poster="{{ project.poster }}"{% endif %}></video>
        </div>
    {% elif media == "instagram" %}
        <a class="instagram" href="{{ project.video_url }}" target="_blank" rel="noreferrer noopener" aria-label="Play Instagram video" title="Open on Instagram">
            {% if project.poster %}<img src="{{ project.poster }}" alt="Instagram video poster">{% endif %}
            <span class="play">▶</span>
        </a>
    {% elif media == "embed" %}
        <div class="embed">{{ embed_html | safe }}</div>
    {% endif %}
    </div>
</article>
{% endblock %}
{% block scripts %}{% if needs_instagram %}<script async src="https://www.instagram.com/embed.js"></script>{% endif %}{% endblock %}
"""

ABOUT = """{% extends "base.html" %}
{% block content %}
<h1>About</h1>
<div class="pre-wrap">{{ about_text }}</div>
{% endblock %}
"""

CONTACT = """{% extends "base.html" %}
{% block content %}
<h1>Contact</h1>
<p style="font-size: 1.1rem;">
    <span>Get in touch!</span>
    {% if email %}<a aria-label="email" href="mailto:{{ email }}">{{ email }}</a>{% endif %}
</p>
<div class="socials">
    {% for s in socials %}<a href="{{ s.href }}" target="_blank" rel="noreferrer" aria-label="{{ s.aria }}">{{ s.label }}</a>{% endfor %}
</div>
{% endblock %}
"""

SUPPORT = """{% extends "base.html" %}
{% block content %}
<section style="margin-bottom: 4rem;">
    <div class="muted" style="text-transform: uppercase; font-size: 0.75rem; letter-spacing: 0.1em;">Official Support</div>
    <h1 style="font-size: 3rem;">{{ support.title }}</h1>
    <p class="muted pre-line" style="font-size: 1.3rem; margin-bottom: 2rem;">{{ support.subtitle }}</p>
    <a class="button primary" href="mailto:{{ support.email }}">Contact Support</a>
    {% if nav_items|length > 1 %}<a class="button" href="/sonidata-support/{{ nav_items[0].id }}/">Read Documentation</a>{% endif %}
</section>
{% if docs %}
<h2>Documentation</h2>
<div class="card-grid">
    {% for d in docs %}<a class="embed" style="text-decoration: none;" href="/sonidata-support/{{ d.id }}/">{{ d.icon }} {{ d.title }}</a>{% endfor %}
</div>
{% endif %}
{% if faqs %}
<h2>Frequently Asked Questions</h2>
{% for faq in faqs %}
<details><summary>{{ faq.question }}</summary><p>{{ faq.answer }}</p></details>
{% endfor %}
{% endif %}
{% endblock %}
"""

DOC = """{% extends "base.html" %}
{% block content %}
<div class="docs">
    <nav class="docs-nav" aria-label="Documentation">
        {% for item in nav_items %}<a href="/sonidata-support/{{ item.id }}/"{% if item.id == current %} class="active"{% endif %}>{{ item.icon }} {{ item.title }}</a>{% endfor %}
    </nav>
    <div>
        <article class="doc">
            <div class="muted" style="font-size: 0.8rem;"><a href="/sonidata-support/">{{ support.title }}</a> › {{ heading }}</div>
            <h1 style="margin-top: 1rem;">{{ icon }} {{ heading }}</h1>
            {% if current == "faq" %}
                {% for faq in faqs %}<details><summary>{{ faq.question }}</summary><p>{{ faq.answer }}</p></details>{% endfor %}
            {% else %}
                {% for block in blocks %}
                    {% if block.type == "paragraph" %}<p>{{ block.text }}</p>
                    {% elif block.type == "heading" %}<h3 id="{{ block.text | anchor }}">{{ block.text }}</h3>
                    {% elif block.type == "code" %}<pre><code>{{ block.text }}</code></pre>
                    {% elif block.type == "tip" %}<div class="tip">{{ block.text }}</div>
                    {% elif block.type == "steps" %}<ol>{% for step in block["items"] %}<li>{{ step }}</li>{% endfor %}</ol>
                    {% elif block.type == "table" %}<table>
                        <thead><tr>{% for h in block.headers %}<th>{{ h }}</th>{% endfor %}</tr></thead>
                        <tbody>{% for row in block.rows %}<tr>{% for cell in row %}<td>{{ cell }}</td>{% endfor %}</tr>{% endfor %}</tbody>
                    </table>
                    {% endif %}
                {% endfor %}
            {% endif %}
            <div class="pager">
                {% if prev_item %}<a href="/sonidata-support/{{ prev_item.id }}/">← {{ prev_item.icon }} {{ prev_item.title }}</a>{% else %}<span></span>{% endif %}
                {% if next_item %}<a href="/sonidata-support/{{ next_item.id }}/">{{ next_item.icon }} {{ next_item.title }} →</a>{% else %}<span></span>{% endif %}
            </div>
        </article>
        {% if headings %}
        <aside class="on-this-page">
            <div class="muted" style="font-size: 0.75rem; text-transform: uppercase;">On this page</div>
            {% for h in headings %}<a href="#{{ h | anchor }}">{{ h }}</a>{% endfor %}
        </aside>
        {% endif %}
    </div>
</div>
{% endblock %}
"""

PRIVACY = """{% extends "base.html" %}
{% block content %}
<article class="doc" style="max-width: 48rem;">
    <h1 style="font-size: 2.5rem;">Privacy Policy</h1>
    <p>Sonidata{% if privacy.lastUpdated %} · Last updated {{ privacy.lastUpdated }}{% endif %}</p>
    <p>This Privacy Policy describes how Sonidata ("the App") handles your information. The App is designed to work entirely on your device.</p>
    <h2>1. Data Collection and Usage</h2>
    <p><strong>Audio recordings.</strong> All audio recordings made using the App are stored entirely on your local device. We do not transmit, collect, or store your audio recordings on our servers.</p>
    <p><strong>Voice Slate.</strong> The Voice Slate feature uses on-device machine learning to transcribe your voice for file naming. No voice data or transcriptions are ever sent to the cloud or third-party servers.</p>
    <p><strong>Location.</strong> If you grant the App permission to access your location, this data is used exclusively to tag your recordings with geographical metadata. It is saved locally within the file metadata on your device and is not collected by us.</p>
    <p><strong>Cloud backups.</strong> You may choose to back up your data using third-party services like iCloud Drive, Google Drive, or Dropbox. Your data is then governed by the privacy policies of those providers. We do not have access to your cloud accounts or backups.</p>
    <h2>2. Analytics and Third-Party Tracking</h2>
    <p>The App does not include analytics, advertising or third-party tracking.</p>
    <h2>3. Data Retention</h2>
    <p>Your data stays on your device until you delete it or remove the App.</p>
    <h2>4. Changes to This Privacy Policy</h2>
    <p>We may update this policy from time to time. Changes are published on this page with a new "last updated" date.</p>
    <h2>Contact Us</h2>
    <p>Questions about this policy? Write to <a href="mailto:{{ privacy.email }}">{{ privacy.email }}</a>.</p>
</article>
{% endblock %}
"""

TEMPLATES = {
    "base.html": BASE,
    "card.html": CARD,
    "home.html": HOME,
    "projects.html": PROJECTS,
    "project.html": PROJECT,
    "about.html": ABOUT,
    "contact.html": CONTACT,
    "support.html": SUPPORT,
    "doc.html": DOC,
    "privacy.html": PRIVACY,
}
