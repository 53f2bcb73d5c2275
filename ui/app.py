"""
Compatibility Explorer UI

A Streamlit application for trying the scoring engine on two
hand-entered profiles: Big Five sliders, interest and value labels,
and lifestyle answers.

Run with: streamlit run ui/app.py
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import streamlit as st

from matchcore.configs import load_config
from matchcore.exceptions import MatchcoreError
from matchcore.inference import CompatibilityScorer, create_scorer, check_dealbreakers
from matchcore.schema import TRAITS, UserProfile, KidsIntent, SubstanceUse, PoliticalLeaning

# =============================================================================
# CONSTANTS
# =============================================================================

CONFIG_PATH = project_root / "configs" / "config.yaml"
NOT_ANSWERED = "Not answered"

COLORS = {
    "background": "#FBF8F6",
    "card_bg": "#FFFFFF",
    "text_primary": "#2B2D42",
    "text_secondary": "#6C6F7F",
    "accent": "#D1495B",
    "accent_light": "#FBE9EB",
    "border": "#ECE4E0",
    "success": "#3C9D6B",
    "warning": "#E09F3E",
}

TRAIT_HELP = {
    "openness": "Curiosity and appetite for new experiences",
    "conscientiousness": "Organisation and dependability",
    "extraversion": "Energy drawn from social interaction",
    "agreeableness": "Warmth and cooperation",
    "neuroticism": "Sensitivity to stress",
}

KIDS_OPTIONS = {
    NOT_ANSWERED: None,
    "Want kids": KidsIntent.WANT,
    "Open to kids": KidsIntent.MAYBE,
    "Don't want kids": KidsIntent.DONT_WANT,
    "Have kids, want more": KidsIntent.HAVE_WANT_MORE,
    "Have kids, open to more": KidsIntent.HAVE_OPEN_TO_MORE,
    "Have kids, don't want more": KidsIntent.HAVE_DONT_WANT_MORE,
    "Prefer not to say": KidsIntent.PREFER_NOT_TO_SAY,
}

SUBSTANCE_OPTIONS = {NOT_ANSWERED: None, **{s.value.title(): s for s in SubstanceUse}}

POLITICS_OPTIONS = {
    NOT_ANSWERED: None,
    **{p.value.replace("_", " ").title(): p for p in PoliticalLeaning},
}

COMPONENT_LABELS = {
    "personality": "Personality",
    "interests_values": "Interests & Values",
    "lifestyle": "Lifestyle",
}


def inject_custom_css():
    """Inject custom CSS."""
    st.markdown(f"""
    <style>
        .stApp {{ background-color: {COLORS['background']}; }}
        h1, h2, h3 {{ color: {COLORS['text_primary']} !important; }}
        .section-title {{
            color: {COLORS['text_primary']};
            font-weight: 600;
            border-bottom: 1px solid {COLORS['border']};
            padding-bottom: 0.4rem;
            margin: 1rem 0 0.75rem;
        }}
        .score-card {{
            text-align: center;
            background: {COLORS['card_bg']};
            border: 1px solid {COLORS['border']};
            border-radius: 16px;
            padding: 2rem 1rem;
        }}
        .score-value {{
            font-size: 4rem;
            font-weight: 700;
            color: {COLORS['accent']};
            line-height: 1;
        }}
        .score-label {{
            color: {COLORS['text_secondary']};
            text-transform: uppercase;
            letter-spacing: 0.1em;
            font-size: 0.85rem;
        }}
        .reason-chip {{
            display: inline-block;
            background: {COLORS['accent_light']};
            color: {COLORS['text_primary']};
            border-radius: 16px;
            padding: 0.3rem 0.8rem;
            margin: 0.25rem;
            font-size: 0.85rem;
        }}
        #MainMenu {{visibility: hidden;}}
        footer {{visibility: hidden;}}
    </style>
    """, unsafe_allow_html=True)


# =============================================================================
# COMPONENT FUNCTIONS
# =============================================================================

@st.cache_resource
def load_scorer() -> CompatibilityScorer:
    """Build the scorer from the project config, or defaults when absent."""
    if CONFIG_PATH.exists():
        return create_scorer(load_config(str(CONFIG_PATH)))
    return CompatibilityScorer()


def _split(text: str) -> list:
    return [part.strip() for part in text.split(",") if part.strip()]


def render_profile_section(label: str, key_prefix: str) -> dict:
    """Render inputs for one profile and return raw answers."""
    st.subheader(label)

    st.markdown('<div class="section-title">Personality</div>', unsafe_allow_html=True)
    personality = {}
    for trait in TRAITS:
        personality[trait] = st.slider(
            trait.title(), min_value=0, max_value=100, value=50,
            key=f"{key_prefix}_{trait}", help=TRAIT_HELP[trait],
        )

    st.markdown('<div class="section-title">Interests & Values</div>', unsafe_allow_html=True)
    interests = st.text_input("Interests (comma separated)", key=f"{key_prefix}_interests",
                              placeholder="hiking, coffee, jazz")
    values = st.text_input("Values (comma separated)", key=f"{key_prefix}_values",
                           placeholder="honesty, family")

    st.markdown('<div class="section-title">Lifestyle</div>', unsafe_allow_html=True)
    kids = st.selectbox("Kids", list(KIDS_OPTIONS), key=f"{key_prefix}_kids")
    religion = st.text_input("Religion (comma separated)", key=f"{key_prefix}_religion")
    drinking = st.selectbox("Drinking", list(SUBSTANCE_OPTIONS), key=f"{key_prefix}_drinking")
    smoking = st.selectbox("Smoking", list(SUBSTANCE_OPTIONS), key=f"{key_prefix}_smoking")
    cannabis = st.selectbox("Cannabis", list(SUBSTANCE_OPTIONS), key=f"{key_prefix}_cannabis")
    politics = st.selectbox("Politics", list(POLITICS_OPTIONS), key=f"{key_prefix}_politics")

    with st.expander("Dating preferences (optional)"):
        gender = st.text_input("Gender", key=f"{key_prefix}_gender")
        looking_for = st.text_input("Looking for (comma separated)", key=f"{key_prefix}_looking_for")

    return {
        "personality": personality,
        "interests": _split(interests),
        "values": _split(values),
        "lifestyle": {
            "wants_kids": KIDS_OPTIONS[kids],
            "religion": _split(religion),
            "drinking": SUBSTANCE_OPTIONS[drinking],
            "smoking": SUBSTANCE_OPTIONS[smoking],
            "cannabis_use": SUBSTANCE_OPTIONS[cannabis],
            "politics": POLITICS_OPTIONS[politics],
        },
        "gender": gender.strip() or None,
        "looking_for": _split(looking_for),
    }


def render_results(scorer: CompatibilityScorer, result, dealbreaker):
    """Render the overall score, component breakdown and reasons."""
    if not dealbreaker.compatible:
        st.warning(f"Dealbreaker: {dealbreaker.reason}. This pair would be filtered from discovery.")

    st.markdown(f"""
    <div class="score-card">
        <div class="score-label">Compatibility</div>
        <div class="score-value">{result.overall_score}</div>
    </div>
    """, unsafe_allow_html=True)

    if result.reasons:
        chips = "".join(f'<span class="reason-chip">{r}</span>' for r in result.reasons)
        st.markdown(f'<div style="text-align:center;margin-top:1rem">{chips}</div>',
                    unsafe_allow_html=True)

    components = {
        "personality": result.personality.score,
        "interests_values": result.interests_and_values.score,
        "lifestyle": result.lifestyle.score,
    }
    contributions = scorer.fusion.contributions(**components)

    cols = st.columns(3)
    for col, (name, score) in zip(cols, components.items()):
        with col:
            st.metric(COMPONENT_LABELS[name], score,
                      help=f"Adds {contributions[name]:.1f} points to the overall score")

    with st.expander("View breakdown"):
        col1, col2 = st.columns(2)
        with col1:
            st.markdown("**Trait differences**")
            st.table({
                t.trait.title(): {"A": t.value_a, "B": t.value_b, "Difference": t.difference}
                for t in result.personality.traits
            })
        with col2:
            iv = result.interests_and_values
            st.markdown(f"**Shared interests** ({iv.interests.score}): "
                        f"{', '.join(iv.interests.shared) or 'none'}")
            st.markdown(f"**Shared values** ({iv.values.score}): "
                        f"{', '.join(iv.values.shared) or 'none'}")
            st.markdown(f"**Compatible lifestyle**: {', '.join(result.lifestyle.compatible) or 'none'}")
            st.markdown(f"**Neutral lifestyle**: {', '.join(result.lifestyle.neutral) or 'none'}")


# =============================================================================
# MAIN APPLICATION
# =============================================================================

def main():
    """Main application entry point."""
    st.set_page_config(page_title="Compatibility Explorer", layout="wide")
    inject_custom_css()

    scorer = load_scorer()

    st.title("Compatibility Explorer")
    st.caption("Scores two profiles with the production scoring rules. Nothing is stored.")

    col_a, col_b = st.columns(2)
    with col_a:
        answers_a = render_profile_section("Person A", "a")
    with col_b:
        answers_b = render_profile_section("Person B", "b")

    if st.button("Compute Compatibility", type="primary", use_container_width=True):
        try:
            profile_a = UserProfile(user_id="person_a", **answers_a)
            profile_b = UserProfile(user_id="person_b", **answers_b)
            result = scorer.score(profile_a, profile_b)
            dealbreaker = check_dealbreakers(profile_a, profile_b)
        except MatchcoreError as e:
            st.error(f"Unable to compute compatibility: {e}")
            st.stop()

        st.divider()
        render_results(scorer, result, dealbreaker)


if __name__ == "__main__":
    main()
