"""Prompt templates for the slide assistant operations."""

SLIDE_FORMAT_GUIDE = """
SUPPORTED MARKDOWN SYNTAX:
- Standard markdown: headings (#, ##, ###), bold, italic, lists, links, images, code blocks, tables
- Slide separator: a line containing only '---' separates slides
- Card grid layout: a list where every item starts with **Title:** description renders as a styled card grid
- Mermaid diagrams: use ```mermaid code blocks (flowchart, sequenceDiagram, pie, graph, etc.)
- Speaker notes: wrap in <!-- notes --> and <!-- /notes --> (not shown in presentation)
- Image captions: an image followed by *italic text* on the next line renders as a figure with caption

AUTOMATIC LAYOUTS:
The system automatically detects content patterns and applies the best layout. Just write clean markdown:
- A slide with only a heading (+ optional subtitle) → centered hero layout
- A slide with heading + text + one image → side-by-side (text left, image right)
- A slide with heading + multiple images → heading on top, image grid below
- A slide with cards + images → cards on left, image on right
No special directives needed — just write the content naturally.

EXAMPLE - Card grid:
- **Feature A:** Description of feature A
- **Feature B:** Description of feature B
- **Feature C:** Description of feature C

EXAMPLE - Image with caption:
![Photo](https://example.com/photo.jpg)
*A beautiful sunset over the mountains*
"""

AVAILABLE_THEMES = ('default', 'dark', 'minimal', 'corporate', 'creative')

DESIGN_EXPERT_MARKDOWN = 'You are a presentation design expert. Return only markdown.'
DESIGN_EXPERT_CONCISE = 'You are a presentation design expert. Be concise.'

SPEAKER_NOTES_SYSTEM = (
    'You are a presentation coach. Generate concise, helpful speaker notes. '
    'Return only the notes text, no markdown formatting or headers.'
)

DIAGRAM_SYSTEM = (
    'You are a diagram expert. Return ONLY valid mermaid diagram syntax. '
    'No markdown code fences, no explanation — just the mermaid code starting '
    'with the diagram type (graph, sequenceDiagram, flowchart, etc.).'
)

VISUAL_REVIEW_SYSTEM = (
    'You are a presentation design expert. Review the slide screenshot and provide '
    'specific, actionable feedback. Be concise.'
)

VISUAL_IMPROVE_SYSTEM = (
    'You are a presentation design expert. Improve the slide content based on the visual screenshot. '
    'Return only markdown. If the slide is too dense, split into multiple slides separated by ---.'
)

THEME_SYSTEM = """You are a CSS theme designer for a presentation slide application.
Generate a complete CSS theme following this exact pattern. The theme name should be a kebab-case identifier derived from the description.

IMPORTANT: Return ONLY a JSON object with these fields: name, displayName, cssContent. No markdown, no explanation.

The cssContent must follow this selector pattern (replace THEME_NAME with your chosen name):

.slide-content[data-theme="THEME_NAME"], [data-theme="THEME_NAME"] .slide-content, [data-theme="THEME_NAME"] .slide {
  --slide-bg: #...; --slide-text: #...; --slide-heading: #...; --slide-accent: #...;
  background: var(--slide-bg); color: var(--slide-text); font-family: '...', sans-serif;
}
[data-theme="THEME_NAME"] h1, [data-theme="THEME_NAME"] h2, [data-theme="THEME_NAME"] h3 {
  font-family: '...', sans-serif; color: var(--slide-heading);
}
"""

VISUAL_SOURCE_TEMPLATE = """Here is a screenshot of a presentation slide and its markdown source.

Markdown source:
```
{slide_content}
```

"""


def generate_system(context: str | None) -> str:
    extra = f'\nContext about the presentation:\n{context}' if context else ''
    return (
        "You are a presentation assistant. Generate markdown slides separated by '---'.\n"
        'Each slide should be concise. Use the full range of supported layout features when appropriate.\n\n'
        f'{SLIDE_FORMAT_GUIDE}\n{extra}'
    )


def improve_prompt(slide_content: str, instruction: str | None) -> str:
    detail = f' ({instruction})' if instruction else ''
    return f'Improve this slide content{detail}:\n\n{slide_content}\n\nReturn only the improved markdown.'


def suggest_style_prompt(content: str) -> str:
    return (
        'Given this presentation content, suggest which theme would work best and why. '
        f'Available themes: {", ".join(AVAILABLE_THEMES)}.\n\n{content}'
    )


def theme_system(existing_css: str | None) -> str:
    reference = f'\nHere is an existing theme CSS for reference:\n{existing_css}' if existing_css else ''
    return THEME_SYSTEM + reference


def theme_prompt(description: str) -> str:
    return f'Create a theme: {description}'


def speaker_notes_prompt(slide_content: str) -> str:
    return f'Generate concise speaker notes for this slide:\n\n{slide_content}'


def diagram_prompt(description: str) -> str:
    return f'Create a mermaid diagram for: {description}'


def rewrite_prompt(slide_content: str, audience: str) -> str:
    return f'Rewrite this slide content for a {audience} audience:\n\n{slide_content}\n\nReturn only the rewritten markdown.'


def rewrite_system() -> str:
    return (
        'You are a presentation expert. Rewrite slide content for the specified audience '
        f'while preserving the structure. Return only markdown.\n\n{SLIDE_FORMAT_GUIDE}'
    )


def outline_prompt(outline: str) -> str:
    return f'Convert this outline into a full presentation:\n\n{outline}'


def outline_system() -> str:
    return (
        'You are a presentation assistant. Convert the outline into well-structured '
        "markdown slides separated by '---'. Make each slide focused and visually appealing. "
        f'Use the full range of layout features when appropriate. Return only the markdown.\n\n{SLIDE_FORMAT_GUIDE}'
    )


def visual_review_prompt(slide_content: str) -> str:
    return VISUAL_SOURCE_TEMPLATE.format(slide_content=slide_content) + (
        'Please review this slide visually. Comment on:\n'
        '- Layout and spacing issues (text overflow, cramped cards, poor alignment)\n'
        '- Content density (too much text for one slide?)\n'
        '- Readability and visual hierarchy\n'
        '- Suggestions for improvement\n'
        '\n'
        'Be specific and actionable.'
    )


def visual_improve_prompt(slide_content: str, instruction: str | None) -> str:
    directive = f'Instruction: {instruction}\n\n' if instruction else ''
    return VISUAL_SOURCE_TEMPLATE.format(slide_content=slide_content) + (
        f"{directive}Improve this slide. If the content is too dense, split it into multiple slides separated by '---'.\n"
        'Fix any visual issues you see in the screenshot (overflow, cramped layout, poor hierarchy).\n'
        '\n'
        f'{SLIDE_FORMAT_GUIDE}\n'
        '\n'
        'Return ONLY the improved markdown, nothing else.'
    )
