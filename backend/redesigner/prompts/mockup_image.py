"""Prompt for generating a single illustrative website mockup image."""

MOCKUP_IMAGE_PROMPT = """Create a professional, modern website mockup for a {business_type} business with a {theme} theme.

BUSINESS CONTEXT:
- Business type: {business_type}
- Theme: {theme}
- Website title: {title}
- Description: {description}

CONTENT TO SHOW:
- Main headings: {headings}
- Key content: {paragraphs}
- Navigation menu: {navigation}
- Contact info: {contact_info}
- Social links: {social_links}

DESIGN REQUIREMENTS:
- One full-page desktop screenshot of a single website, no device frames
- {theme} color scheme throughout
- Clean responsive layout with navigation bar, hero section and content areas
- Professional typography and spacing
- Realistic content placement that matches the business

Style: professional website mockup, clean modern UI, business-appropriate."""
