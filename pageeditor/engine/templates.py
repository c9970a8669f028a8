"""Markup and stylesheet blocks inserted by suggestion actions."""

from __future__ import annotations

from typing import Dict

from .actions import (
    CONTENT_DETAILS,
    CSS_RESPONSIVE,
    CSS_SHADOW,
    SECTION_CTA,
    SECTION_FREE_TRIAL,
    SECTION_TESTIMONIALS,
)

DEFAULT_HEADING = "Main Title"
HEADING_CLASS = "text-3xl font-bold text-gray-900 mb-6"
META_DESCRIPTION = "Describe this page in one or two sentences."

SECTION_TEMPLATES: Dict[str, str] = {
    SECTION_CTA: """
<section class="py-12 bg-blue-50">
  <div class="max-w-4xl mx-auto text-center px-4">
    <h2 class="text-2xl font-bold text-gray-900 mb-4">Ready to get started?</h2>
    <p class="text-gray-600 mb-6">Sign up in minutes and start today.</p>
    <button class="bg-blue-500 hover:bg-blue-600 text-white px-8 py-3 rounded-lg font-medium transition-colors">Apply Now</button>
  </div>
</section>
""",
    SECTION_FREE_TRIAL: """
<section class="py-12 bg-green-50">
  <div class="max-w-4xl mx-auto text-center px-4">
    <h2 class="text-2xl font-bold text-gray-900 mb-4">Start your free trial</h2>
    <p class="text-gray-600 mb-6">Try it free for 14 days. No credit card required.</p>
    <button class="bg-green-500 hover:bg-green-600 text-white px-8 py-3 rounded-lg font-medium transition-colors">Start Free</button>
  </div>
</section>
""",
    SECTION_TESTIMONIALS: """
<section class="py-12 bg-gray-50">
  <div class="max-w-4xl mx-auto px-4">
    <h2 class="text-2xl font-bold text-gray-900 text-center mb-8">What our customers say</h2>
    <div class="grid md:grid-cols-2 gap-6">
      <div class="bg-white p-6 rounded-lg shadow">
        <p class="text-gray-600 mb-4">"Our team became noticeably more efficient after switching."</p>
        <div class="text-sm text-gray-500">Sample Co., CEO</div>
      </div>
      <div class="bg-white p-6 rounded-lg shadow">
        <p class="text-gray-600 mb-4">"Easy to use and excellent value for money."</p>
        <div class="text-sm text-gray-500">Example Ltd., Head of Sales</div>
      </div>
    </div>
  </div>
</section>
""",
}

CONTENT_TEMPLATES: Dict[str, str] = {
    CONTENT_DETAILS: """
<section class="py-8 px-4">
  <div class="max-w-4xl mx-auto">
    <h2 class="text-xl font-semibold text-gray-900 mb-4">More details</h2>
    <p class="text-gray-600 leading-relaxed mb-4">
      Use this space to describe your service or product in detail and answer
      the questions your visitors are most likely to ask.
    </p>
    <p class="text-gray-600 leading-relaxed">
      Concrete features, benefits and usage examples help visitors understand
      the offer and build trust.
    </p>
  </div>
</section>
""",
}

CSS_BLOCKS: Dict[str, str] = {
    CSS_SHADOW: """
/* Suggested: shadow effects */
.card, .btn, button {
  box-shadow: 0 4px 6px rgba(0, 0, 0, 0.1);
  transition: box-shadow 0.3s ease;
}

.card:hover, .btn:hover, button:hover {
  box-shadow: 0 8px 12px rgba(0, 0, 0, 0.15);
}
""",
    CSS_RESPONSIVE: """
/* Suggested: responsive breakpoints */
@media (max-width: 768px) {
  .container {
    padding: 1rem;
  }

  h1 {
    font-size: 1.5rem;
  }

  .grid {
    grid-template-columns: 1fr;
  }
}

@media (max-width: 480px) {
  .text-lg {
    font-size: 1rem;
  }

  .px-8 {
    padding-left: 1rem;
    padding-right: 1rem;
  }
}
""",
}
