"""
Chapter tree for the enemies-to-lovers blueprints.

Every chapter a blueprint can contain is defined here once. Acts 1-3 are
lists of slots; each slot holds variants tagged with the context they
apply to (tension, triangle, ending). Act 4 branches three ways by
ResolutionPath.

Chapter functions stay generic. Phase 1 fills them with story-specific
descriptions, and scene composition happens later, per story and cast.
"""

from typing import Dict, Tuple

from novelcraft.storyteller.blueprint_types import (
    Act,
    ChapterDefinition,
    ChapterSlot,
    Condition,
    ConsequenceVariant,
    EmploymentGroup,
    EmploymentOption,
    EndStates,
    Ending,
    ResolutionPath,
    SlotVariant,
    Tension,
)


# =============================================================================
# ACT 1: SETUP
# =============================================================================

HER_WORLD_SAFETY = ChapterDefinition(
    key="her_world",
    title="Her world",
    description=(
        "Establish the protagonist's daily life and the pressure that makes her situation "
        "unsustainable. Show what she's protecting and why safety matters to her."
    ),
    end_states=EndStates(
        triangle=(
            "She is holding everything together alone, and the pressure now has a deadline "
            "she cannot meet on her own."
        ),
        no_triangle="She is holding everything together alone, and one more blow will break it.",
    ),
    employment=(
        EmploymentGroup(
            key="what_she_protects",
            header="What she is protecting",
            options=(
                EmploymentOption("family_business", "A family business that keeps people she loves employed"),
                EmploymentOption("dependant", "A younger sibling or child who depends on her"),
                EmploymentOption("home", "A home or piece of land that is all she has left"),
                EmploymentOption("community", "A place her community relies on (a clinic, a bar, a shelter)"),
            ),
            cascading_note="Whatever she protects is what the final chapter secures or loses.",
        ),
        EmploymentGroup(
            key="the_pressure",
            header="The pressure that makes her situation unsustainable",
            options=(
                EmploymentOption("debt", "A debt coming due"),
                EmploymentOption("physical_threat", "A physical threat circling her world"),
                EmploymentOption("lost_support", "The loss of the one person who shared the load"),
                EmploymentOption(
                    "secret_cost",
                    "The cost of the secret she is keeping is rising",
                    show_when=Condition.SECRET,
                ),
            ),
        ),
    ),
)

HER_WORLD_IDENTITY = ChapterDefinition(
    key="her_world",
    title="Her world",
    description=(
        "Establish the protagonist inside the role she was raised to fill. Show how well she "
        "plays it and the first sign that it no longer fits."
    ),
    end_states=EndStates(
        identity="She is exactly who everyone expects her to be, and it is starting to feel like a cage.",
    ),
    employment=(
        EmploymentGroup(
            key="the_role",
            header="The role she was raised to fill",
            options=(
                EmploymentOption("heir", "Heir to a family name, business or title"),
                EmploymentOption("dutiful_daughter", "The dutiful daughter of a strict or traditional family"),
                EmploymentOption("community_pillar", "A pillar of a close community with clear rules"),
                EmploymentOption("chosen_career", "A career chosen for her before she could choose"),
            ),
            cascading_note="The role named here is the role she walks away from in Act 4.",
        ),
        EmploymentGroup(
            key="the_crack",
            header="The first crack in the role",
            options=(
                EmploymentOption("private_passion", "A private passion she hides from everyone"),
                EmploymentOption("public_slip", "A public moment where the mask slips"),
                EmploymentOption("envy", "Envy of someone who lives freely"),
                EmploymentOption(
                    "hidden_self",
                    "The part of herself she keeps secret is getting harder to hide",
                    show_when=Condition.SECRET,
                ),
            ),
        ),
    ),
)

THE_MEET = ChapterDefinition(
    key="the_meet",
    title="The meet",
    description=(
        "The love interest enters her world as a hostile force. First encounter establishes "
        "mutual antagonism. He notices her. The aftermath worsens her existing pressure."
    ),
    end_states=EndStates(
        identity=(
            "He stands for everything her world taught her to despise, and he has seen straight "
            "through the role she plays."
        ),
        triangle=(
            "He is a hostile force inside her world, and she has made an enemy she cannot afford "
            "just as a gentler offer appears."
        ),
        default="He is a hostile force inside her world, and she has made an enemy she cannot afford.",
    ),
    employment=(
        EmploymentGroup(
            key="how_he_enters",
            header="How he enters her world",
            tension=Tension.SAFETY,
            options=(
                EmploymentOption("takeover", "He arrives to take over, foreclose on or buy out what she protects"),
                EmploymentOption("enforcer", "He works for the people threatening her"),
                EmploymentOption("investigator", "He is investigating something that implicates her world"),
                EmploymentOption("neighbour", "He moves in next door and trouble follows him"),
            ),
        ),
        EmploymentGroup(
            key="what_he_represents",
            header="What he represents to her world",
            tension=Tension.IDENTITY,
            options=(
                EmploymentOption("rival_family", "The family or faction hers is defined against"),
                EmploymentOption("outsider", "An outsider who openly mocks the world she belongs to"),
                EmploymentOption("defector", "Someone who walked away from a life like hers"),
            ),
        ),
        EmploymentGroup(
            key="first_clash",
            header="The first clash",
            options=(
                EmploymentOption("public_clash", "A public confrontation where she refuses to back down"),
                EmploymentOption("private_read", "A private exchange where he reads her too accurately"),
                EmploymentOption("practical_collision", "A practical collision: he breaks something she needs"),
                EmploymentOption(
                    "secret_brush",
                    "He comes dangerously close to what she is hiding",
                    show_when=Condition.SECRET,
                ),
            ),
        ),
    ),
    notes=("He notices her. The reader must see that he noticed even if she does not.",),
)

THE_EXPECTATION = ChapterDefinition(
    key="the_expectation",
    title="The expectation",
    description=(
        "Her family or community lays out exactly who she must be and what she must do next. "
        "The expectation is specific and has a date attached. He is the one thing it forbids."
    ),
    end_states=EndStates(
        identity="She has promised to be who they need, and he is the one thing that promise forbids.",
    ),
    employment=(
        EmploymentGroup(
            key="the_expectation",
            header="What is expected of her",
            options=(
                EmploymentOption("arranged_match", "A match or engagement that has been arranged for her"),
                EmploymentOption("succession", "Taking over from a parent on their terms"),
                EmploymentOption("public_vow", "A public commitment or ceremony she must go through with"),
            ),
            cascading_note="The expectation set here is what she breaks in Act 4.",
        ),
    ),
)

SAFE_OPTION = ChapterDefinition(
    key="safe_option",
    title="The safe option presents itself",
    description=(
        "The rival offers a solution to her pressure. The offer is genuinely appealing — safety, "
        "stability, rescue. Real world consequences reinforce why she must accept. People around "
        "her depend on it."
    ),
    end_states=EndStates(
        triangle=(
            "She has accepted the rival's rescue in principle, and people she loves now depend on "
            "her saying yes."
        ),
    ),
    employment=(
        EmploymentGroup(
            key="the_offer",
            header="What the rival offers",
            options=(
                EmploymentOption("debt_payoff", "To pay off or absorb the debt that is crushing her"),
                EmploymentOption("marriage", "Marriage, and everything that comes with his name"),
                EmploymentOption("protection", "Protection from the threat circling her world"),
                EmploymentOption("partnership", "A partnership that saves what she protects"),
            ),
            cascading_note="Whatever the rival offers becomes the leverage he uses in Act 3.",
        ),
        EmploymentGroup(
            key="why_appealing",
            header="Why the rival is genuinely appealing",
            options=(
                EmploymentOption("kindness", "He is kind to the people she loves"),
                EmploymentOption("history", "They share a history and he knew her before the pressure"),
                EmploymentOption("respectability", "He is everything her world approves of"),
            ),
        ),
    ),
    notes=("The rival is not a villain yet. If the reader distrusts him here, the triangle fails.",),
)

PRESSURE_TIGHTENS = ChapterDefinition(
    key="pressure_tightens",
    title="The pressure tightens",
    description=(
        "The real world consequences of her pressure land. People around her depend on her and "
        "there is no safe option, only the hope of holding on. His presence is now tangled up "
        "with her survival."
    ),
    end_states=EndStates(
        no_triangle=(
            "Her options have narrowed to holding on alone, and the danger he represents is now "
            "tangled up with her survival."
        ),
    ),
    employment=(
        EmploymentGroup(
            key="the_consequence",
            header="The consequence that lands",
            options=(
                EmploymentOption("deadline", "A deadline is set that she cannot meet"),
                EmploymentOption("someone_hurt", "Someone she protects is hurt or frightened"),
                EmploymentOption("lost_income", "The income that kept her afloat disappears"),
            ),
        ),
        EmploymentGroup(
            key="his_connection",
            header="How he is tangled up in it",
            options=(
                EmploymentOption("he_caused_it", "His arrival set the consequence in motion"),
                EmploymentOption("he_benefits", "He stands to gain from her failure"),
                EmploymentOption("he_witnesses", "He witnesses it and says nothing"),
            ),
        ),
    ),
)

FORCED_PROXIMITY = ChapterDefinition(
    key="forced_proximity",
    title="Forced proximity that reinforces first impression",
    description=(
        "A second encounter with the primary confirms her initial judgement. His behaviour is "
        "aggressive or threatening — the only response he knows. He is exactly what she feared."
    ),
    end_states=EndStates(
        triangle="She commits to the safe path. He is exactly what she feared.",
        no_triangle="She resolves to keep him at arm's length. He is exactly what she feared.",
    ),
    employment=(
        EmploymentGroup(
            key="why_forced",
            header="Why they are forced together",
            options=(
                EmploymentOption("shared_job", "A job or contract neither can walk away from"),
                EmploymentOption("same_roof", "Circumstances put them under the same roof"),
                EmploymentOption("stranded", "They are stranded together"),
                EmploymentOption("legal_order", "A legal or official order binds them"),
            ),
        ),
        EmploymentGroup(
            key="confirming_behaviour",
            header="How his behaviour confirms her fear",
            options=(
                EmploymentOption("threat", "He threatens what she protects"),
                EmploymentOption("cold_deal", "He makes a cold deal at someone else's expense"),
                EmploymentOption("violence_nearby", "Violence follows him into her space"),
            ),
        ),
    ),
)


# =============================================================================
# ACT 2: FALLING
# =============================================================================

MAYBE_WRONG = ChapterDefinition(
    key="maybe_wrong",
    title="Maybe I was wrong",
    description=(
        "Real trouble exposes her vulnerability. The primary contradicts her first impression "
        "through action — protection, provision, generosity. No words, no explanation, just the act."
    ),
    end_states=EndStates(
        identity="He showed her a version of herself she was never allowed to be, and she liked it.",
        triangle="He came through when the rival did not, and she cannot unsee it.",
        default="He came through when no one else did, and she cannot unsee it.",
    ),
    employment=(
        EmploymentGroup(
            key="the_trouble",
            header="The trouble that exposes her",
            tension=Tension.SAFETY,
            options=(
                EmploymentOption("accident", "An accident or emergency in her world"),
                EmploymentOption("threat_arrives", "The threat she feared arrives"),
                EmploymentOption("collapse", "She physically or emotionally collapses under the load"),
            ),
        ),
        EmploymentGroup(
            key="the_exposure",
            header="The moment the role fails her",
            tension=Tension.IDENTITY,
            options=(
                EmploymentOption("humiliation", "She is humiliated by her own world"),
                EmploymentOption("impossible_rule", "A rule of the role demands something she cannot do"),
                EmploymentOption("caught_out", "She is caught being herself"),
            ),
        ),
        EmploymentGroup(
            key="his_act",
            header="His contradicting act",
            options=(
                EmploymentOption("protects", "He protects her or someone she loves"),
                EmploymentOption("provides", "He quietly provides what she needs"),
                EmploymentOption("gives_up", "He gives up something of his own for her"),
            ),
        ),
        EmploymentGroup(
            key="rival_fails",
            header="How the rival fails to meet the moment",
            show_when=Condition.TRIANGLE,
            options=(
                EmploymentOption("absent", "He is absent when it matters"),
                EmploymentOption("conditions", "He helps, but with conditions"),
                EmploymentOption("blames_her", "He makes the trouble her fault"),
            ),
        ),
    ),
)

MORE_TO_HIM = ChapterDefinition(
    key="more_to_him",
    title="There's so much more to him",
    description=(
        "A deeper encounter reveals the primary's true character — real vulnerability, real "
        "conversation. She sees the man behind the threat."
    ),
    end_states=EndStates(
        triangle=(
            "She has seen who he really is, and the rival has noticed the shift and found "
            "leverage he can use later."
        ),
        no_triangle="She has seen who he really is, and her armour against him has a crack in it.",
    ),
    employment=(
        EmploymentGroup(
            key="the_reveal",
            header="What she learns about him",
            options=(
                EmploymentOption("his_wound", "The wound that made him dangerous"),
                EmploymentOption("his_loyalty", "Who he is loyal to, and why"),
                EmploymentOption("his_cost", "What his hardness costs him"),
            ),
        ),
        EmploymentGroup(
            key="rival_leverage",
            header="The leverage the rival gains",
            show_when=Condition.TRIANGLE,
            options=(
                EmploymentOption("leverage_debt", "Her debt, now owed to him"),
                EmploymentOption("leverage_information", "Information about the primary's past"),
                EmploymentOption(
                    "leverage_secret",
                    "Knowledge of the secret she is keeping",
                    show_when=Condition.SECRET,
                ),
            ),
        ),
    ),
    notes=("The rival's flaw is exposed here — not evil, just small.",),
)

WHO_SHE_IS_WITH_HIM = ChapterDefinition(
    key="who_she_is_with_him",
    title="Who she is with him",
    description=(
        "In his world she acts without the role. A deeper encounter reveals his true character, "
        "and she recognises herself in it."
    ),
    end_states=EndStates(
        identity="She has been herself with him for one night, and she does not know how to go back.",
    ),
    employment=(
        EmploymentGroup(
            key="his_world",
            header="How she enters his world",
            options=(
                EmploymentOption("invitation", "He invites her somewhere her world would never go"),
                EmploymentOption("accident", "She ends up there by accident"),
                EmploymentOption("escape", "She runs there to escape her own world"),
            ),
        ),
        EmploymentGroup(
            key="the_almost",
            header="The almost",
            options=(
                EmploymentOption("kiss_interrupted", "A kiss, interrupted"),
                EmploymentOption("confession_swallowed", "A confession she swallows"),
                EmploymentOption("touch", "A touch neither acknowledges"),
            ),
        ),
    ),
)

KEEP_ME_SAFE = ChapterDefinition(
    key="keep_me_safe",
    title="He can actually keep me safe",
    description=(
        "The primary makes a spontaneous gesture — he's there for her, not for business. She "
        "enters his world and sees who he really is. The almost — physical closeness, the line "
        "nearly crossed. The rival confronts her. The safe option becomes possessive."
    ),
    end_states=EndStates(
        triangle="She has nearly crossed the line with him, and the rival has shown his possessive edge.",
    ),
    employment=(
        EmploymentGroup(
            key="the_gesture",
            header="His spontaneous gesture",
            options=(
                EmploymentOption("shows_up", "He shows up when no one asked him to"),
                EmploymentOption("remembers", "He remembers something small she said"),
                EmploymentOption("takes_risk", "He takes a risk in his own world for her"),
            ),
        ),
        EmploymentGroup(
            key="rival_confrontation",
            header="How the rival confronts her",
            options=(
                EmploymentOption("jealous_scene", "A jealous scene in front of others"),
                EmploymentOption("quiet_ultimatum", "A quiet ultimatum"),
                EmploymentOption("calls_in_offer", "He reminds her what she owes him"),
            ),
            cascading_note="The possessiveness shown here must escalate, not reset, in Act 3.",
        ),
    ),
)


# =============================================================================
# ACT 3: RETREAT
# =============================================================================

WITHDRAWAL = ChapterDefinition(
    key="withdrawal",
    title="The withdrawal and retreat",
    description=(
        "The primary pulls away without explanation. Her original fears seem confirmed. She "
        "retreats to safety and commits fully."
    ),
    end_states=EndStates(
        triangle=(
            "The rival's evidence has confirmed her worst fear, and she has committed to the "
            "safe option."
        ),
        no_triangle="His silence has confirmed her worst fear, and she has sealed herself off from him.",
    ),
    employment=(
        EmploymentGroup(
            key="why_he_withdraws",
            header="Why he withdraws",
            options=(
                EmploymentOption("protecting_her", "To protect her from his world"),
                EmploymentOption("called_back", "His world calls him back and he goes"),
                EmploymentOption("own_wound", "His own wound makes him run"),
            ),
        ),
        EmploymentGroup(
            key="what_confirms_it",
            header="What confirms her fear",
            show_when=Condition.TRIANGLE,
            options=(
                EmploymentOption("manufactured_evidence", "Evidence the rival manufactures against him"),
                EmploymentOption("twisted_truth", "A true fact the rival twists"),
                EmploymentOption("staged_scene", "A scene the rival stages for her to witness"),
            ),
        ),
        EmploymentGroup(
            key="what_confirms_it_alone",
            header="What confirms her fear",
            show_when=Condition.NO_TRIANGLE,
            options=(
                EmploymentOption("old_pattern", "He repeats the behaviour she first feared"),
                EmploymentOption("half_truth", "She learns a half-truth about his past"),
                EmploymentOption("his_world_intrudes", "His world intrudes on hers and someone gets hurt"),
            ),
        ),
    ),
)

THE_CHOICE = ChapterDefinition(
    key="the_choice",
    title="The choice",
    description=(
        "Her world demands she choose between the role and him. He refuses to be hidden or made "
        "small. She chooses the role."
    ),
    end_states=EndStates(
        identity="She has chosen who she was raised to be and told him so to his face.",
    ),
    employment=(
        EmploymentGroup(
            key="the_demand",
            header="How her world forces the choice",
            options=(
                EmploymentOption("discovered_together", "They are discovered together"),
                EmploymentOption("deadline_arrives", "The expectation's date arrives"),
                EmploymentOption("ultimatum", "The family voice issues an ultimatum"),
            ),
        ),
        EmploymentGroup(
            key="his_refusal",
            header="What he refuses",
            options=(
                EmploymentOption("refuses_hiding", "To be her secret"),
                EmploymentOption("refuses_change", "To become acceptable to her world"),
            ),
        ),
    ),
)

DARK_MOMENT = ChapterDefinition(
    key="dark_moment",
    title="The dark moment",
    description=(
        "The primary and protagonist confront each other. Neither believes the other. They part "
        "with nothing left — enemies again, but with love underneath."
    ),
    end_states=EndStates(
        identity="They part as enemies again; she has the life she was promised, and it is nothing.",
        default="They part as enemies again, with love underneath and nothing left to say.",
    ),
    employment=(
        EmploymentGroup(
            key="the_confrontation",
            header="The shape of the confrontation",
            options=(
                EmploymentOption("she_accuses", "She accuses him with what she believes is proof"),
                EmploymentOption("he_confirms_it", "He lets her believe the worst"),
                EmploymentOption("mutual_wound", "Each hits the other's deepest wound"),
            ),
        ),
        EmploymentGroup(
            key="secret_surfaces",
            header="How the secret surfaces",
            show_when=Condition.SECRET,
            options=(
                EmploymentOption("confession", "The keeper confesses, too late"),
                EmploymentOption("discovered", "The other discovers it"),
                EmploymentOption(
                    "rival_weaponises",
                    "The rival reveals it to drive them apart",
                    show_when=Condition.TRIANGLE,
                ),
                EmploymentOption("third_party", "Someone from her world lets it slip"),
            ),
            cascading_note="Whatever surfaces here must be the secret planted in Act 1; it cannot be new.",
        ),
    ),
)


# =============================================================================
# ACT 4: RESOLUTION
# =============================================================================

ACCEPTED_FATE = ChapterDefinition(
    key="accepted_fate",
    title="Accepted her fate",
    description=(
        "She commits to the safe path. Goes through the motions. Something is dead inside her. "
        "We see what she's lost."
    ),
    end_states=EndStates(
        triangle="She has said yes to the rival and is living a life that is slowly erasing her.",
        no_triangle="She has made herself safe and small, and the life she protected feels empty.",
    ),
    employment=(
        EmploymentGroup(
            key="what_is_dead",
            header="What shows us what she has lost",
            options=(
                EmploymentOption("routine", "A routine she used to love, done mechanically"),
                EmploymentOption("reminder", "A reminder of him she cannot throw away"),
                EmploymentOption("noticed", "Someone who loves her notices she is gone"),
            ),
        ),
    ),
)

DISCOVERS_TRUTH = ChapterDefinition(
    key="discovers_truth",
    title="Discovers the truth",
    description=(
        "Evidence emerges that the rival manipulated the retreat. The safe option was never "
        "safe — the rival is the real danger. Everything that destroyed them was engineered."
    ),
    end_states=EndStates(
        triangle="She knows the rival engineered everything, and she knows what he is capable of.",
    ),
    employment=(
        EmploymentGroup(
            key="how_truth_emerges",
            header="How the truth emerges",
            options=(
                EmploymentOption("evidence_trail", "The manufactured evidence unravels"),
                EmploymentOption("insider", "Someone close to the rival tells her"),
                EmploymentOption("rival_slips", "The rival slips and reveals himself"),
            ),
        ),
    ),
)

REUNITED = ChapterDefinition(
    key="reunited",
    title="Reunited",
    description=(
        "She goes to the primary with the truth. Everything is on the table. He already knew the "
        "worst about her and chose her anyway. No more armour. They choose each other."
    ),
    end_states=EndStates(
        default="Nothing is hidden between them any more, and they have chosen each other.",
    ),
    employment=(
        EmploymentGroup(
            key="who_moves_first",
            header="Who moves first",
            options=(
                EmploymentOption("she_goes", "She goes to him"),
                EmploymentOption("he_returns", "He comes back, and she lets him in"),
            ),
        ),
        EmploymentGroup(
            key="secret_absolved",
            header="How the secret is absolved",
            show_when=Condition.SECRET,
            options=(
                EmploymentOption("already_knew", "He already knew and chose her anyway"),
                EmploymentOption("forgives", "The wronged one forgives, with conditions spoken aloud"),
            ),
        ),
    ),
    notes=("The consummation happens here, not earlier.",),
)

THE_REVERSAL = ChapterDefinition(
    key="the_reversal",
    title="The reversal",
    description=(
        "The rival is exposed and becomes the actual threat. He uses his remaining power to hunt "
        "them. Someone from her world eliminates the rival — someone who finally saw the truth."
    ),
    end_states=EndStates(
        triangle="The rival is finished, brought down by someone from her own world.",
    ),
    employment=(
        EmploymentGroup(
            key="how_exposed",
            header="How the rival is exposed",
            options=(
                EmploymentOption("public_exposure", "Publicly, in front of the world that trusted him"),
                EmploymentOption("private_exposure", "Privately, to the people whose opinion he needs"),
            ),
        ),
        EmploymentGroup(
            key="who_stops_him",
            header="Who stops him",
            options=(
                EmploymentOption("her_ally", "Her ally"),
                EmploymentOption("dependant_grown", "The person she protected, grown brave"),
                EmploymentOption("rivals_own", "Someone from the rival's own circle"),
            ),
        ),
    ),
    notes=("The primary does not eliminate the rival. Someone from her world does.",),
)

HEA_SAFETY = ChapterDefinition(
    key="hea",
    title="HEA",
    description=(
        "She secures what she built by entrusting it to others. The primary commits his resources "
        "to protect what matters to her. They leave together — not into safety, not into danger. "
        "Just together."
    ),
    end_states=EndStates(
        default="What she protected is secure, and they are together with nothing left between them.",
    ),
    employment=(
        EmploymentGroup(
            key="how_secured",
            header="How what she protected is secured",
            options=(
                EmploymentOption("entrusted", "She entrusts it to someone who has earned it"),
                EmploymentOption("his_resources", "He commits his resources to it"),
                EmploymentOption("rebuilt", "They rebuild it together"),
            ),
        ),
    ),
)

BITTERSWEET_ENDING = ChapterDefinition(
    key="bittersweet",
    title="The price of together",
    description=(
        "They choose each other, but the thing she protected is lost or given up. Love survives; "
        "the old life does not. The final image holds both the gain and the loss."
    ),
    end_states=EndStates(
        default="They are together, and what she spent the story protecting is gone.",
    ),
    employment=(
        EmploymentGroup(
            key="what_is_lost",
            header="What is lost",
            options=(
                EmploymentOption("the_place", "The place itself, sold or destroyed"),
                EmploymentOption("a_person", "A person who could not follow her"),
                EmploymentOption("her_standing", "Her standing in her old world"),
            ),
        ),
    ),
)

ACCEPTED_FATE_TRAGIC = ChapterDefinition(
    key="accepted_fate_tragic",
    title="Accepted her fate",
    description=(
        "She commits to the safe path and stays there. The armour holds. We see exactly what it "
        "is costing her, and so does he."
    ),
    end_states=EndStates(
        triangle="She is the rival's now, in every way that the world can see.",
        no_triangle="She has closed every door he could come back through.",
    ),
    employment=(
        EmploymentGroup(
            key="what_is_dead",
            header="What shows us what she has lost",
            options=(
                EmploymentOption("routine", "A routine she used to love, done mechanically"),
                EmploymentOption("reminder", "A reminder of him she cannot throw away"),
            ),
        ),
    ),
    alternate=ChapterDefinition(
        key="last_reach",
        title="The last reach",
        description=(
            "She goes back for him once, against everything — and arrives to find the door "
            "already closed. He has made his own retreat."
        ),
        end_states=EndStates(
            default="She reached for him once, and the door was already closed.",
        ),
        employment=(
            EmploymentGroup(
                key="why_closed",
                header="Why the door is closed",
                options=(
                    EmploymentOption("he_left", "He has already left"),
                    EmploymentOption("he_refuses", "He refuses to believe her"),
                    EmploymentOption("someone_else", "His world has claimed him"),
                ),
            ),
        ),
    ),
    notes=("Choose either this chapter or its alternate. Both occupy the same chapter number.",),
)

TRUTH_TOO_LATE = ChapterDefinition(
    key="truth_too_late",
    title="Discovers the truth",
    description=(
        "Evidence emerges that the rival manipulated the retreat. Everything that destroyed them "
        "was engineered, and she learns it only after it can no longer be undone."
    ),
    end_states=EndStates(
        triangle="She knows the rival engineered everything, and knows it too late.",
    ),
    employment=(
        EmploymentGroup(
            key="how_truth_emerges",
            header="How the truth emerges",
            options=(
                EmploymentOption("evidence_trail", "The manufactured evidence unravels"),
                EmploymentOption("insider", "Someone close to the rival tells her"),
                EmploymentOption("rival_boasts", "The rival, secure, admits it"),
            ),
        ),
    ),
)

TOO_LATE = ChapterDefinition(
    key="too_late",
    title="Too late",
    description=(
        "She goes to him with the truth. The danger she feared from the start arrives in earnest, "
        "and the moment to choose him passes."
    ),
    end_states=EndStates(
        default="The moment to choose him has passed, and the danger she feared has arrived.",
    ),
    employment=(
        EmploymentGroup(
            key="the_danger",
            header="The danger that arrives",
            options=(
                EmploymentOption("his_world", "His world comes for him"),
                EmploymentOption("her_threat", "The threat to what she protects comes due"),
                EmploymentOption(
                    "the_rival",
                    "The rival acts",
                    show_when=Condition.TRIANGLE,
                ),
            ),
        ),
    ),
)

WHAT_REMAINS = ChapterDefinition(
    key="what_remains",
    title="What remains",
    description=(
        "Show the cost. She lives in the world her choice made. The final image proves she "
        "understood, too late, what he was."
    ),
    end_states=EndStates(
        default="She understands what he was, and lives with what her armour cost her.",
    ),
    consequence_variants=(
        ConsequenceVariant(
            "loss_death",
            "He dies",
            "He dies protecting what she built. She keeps it, and it is all she has of him.",
        ),
        ConsequenceVariant(
            "loss_apart",
            "They survive apart",
            "Both survive, but apart, each carrying the other. The door stays closed.",
        ),
        ConsequenceVariant(
            "loss_self",
            "She loses herself",
            "She keeps what she protected and loses the woman she became with him.",
        ),
    ),
    notes=("Use exactly one consequence variant.",),
)

CHOOSING_HERSELF = ChapterDefinition(
    key="choosing_herself",
    title="Choosing herself",
    description=(
        "She walks away from the role publicly, at real cost. Her world reacts. For the first "
        "time she is no one's but her own."
    ),
    end_states=EndStates(
        identity="She has broken the expectation in front of everyone, and she is still standing.",
    ),
    employment=(
        EmploymentGroup(
            key="how_she_breaks",
            header="How she breaks the expectation",
            options=(
                EmploymentOption("breaks_engagement", "She ends the arranged match"),
                EmploymentOption("refuses_succession", "She refuses to take over on their terms"),
                EmploymentOption("walks_out", "She walks out of the ceremony"),
            ),
        ),
        EmploymentGroup(
            key="secret_owned",
            header="How she owns her secret",
            show_when=Condition.SECRET,
            options=(
                EmploymentOption("says_it", "She says it aloud to her world"),
                EmploymentOption("lets_it_stand", "She stops hiding it and lets it stand"),
            ),
        ),
    ),
)

HEA_IDENTITY = ChapterDefinition(
    key="hea",
    title="HEA",
    description=(
        "She goes to him as herself. He already knew who she was and chose her anyway. They "
        "choose each other, and she chooses herself."
    ),
    end_states=EndStates(
        identity="She is with him as herself, in a life she chose.",
    ),
    employment=(
        EmploymentGroup(
            key="the_final_image",
            header="The final image",
            options=(
                EmploymentOption("new_home", "A home that belongs to neither of their worlds"),
                EmploymentOption("old_world_changed", "Her old world, changed by her leaving it"),
                EmploymentOption("his_world_open", "His world, opened to her"),
            ),
        ),
    ),
)


# =============================================================================
# TREE ASSEMBLY
# =============================================================================

ACTS: Tuple[Act, ...] = (
    Act(
        number=1,
        name="Setup",
        descriptions={
            Tension.SAFETY: "She hates him because he represents something dangerous. Forced proximity.",
            Tension.IDENTITY: (
                "She hates him because he represents everything she was raised to reject. "
                "Being near him makes her question who she is supposed to be."
            ),
        },
        slots=(
            ChapterSlot("her_world", (
                SlotVariant(HER_WORLD_SAFETY, tension=Tension.SAFETY),
                SlotVariant(HER_WORLD_IDENTITY, tension=Tension.IDENTITY),
            )),
            ChapterSlot("the_meet", (
                SlotVariant(THE_MEET),
            )),
            ChapterSlot("pressure_point", (
                SlotVariant(THE_EXPECTATION, tension=Tension.IDENTITY),
                SlotVariant(SAFE_OPTION, tension=Tension.SAFETY, triangle=True),
                SlotVariant(PRESSURE_TIGHTENS, tension=Tension.SAFETY, triangle=False),
            )),
            ChapterSlot("forced_proximity", (
                SlotVariant(FORCED_PROXIMITY, tension=Tension.SAFETY),
            )),
        ),
    ),
    Act(
        number=2,
        name="Falling",
        descriptions={
            Tension.SAFETY: (
                "She discovers he's not what she assumed. The attraction feels dangerous. "
                "Each step closer terrifies her."
            ),
            Tension.IDENTITY: (
                "She discovers he sees the person she hides. The attraction feels like a betrayal "
                "of everything she was raised to be."
            ),
        },
        slots=(
            ChapterSlot("maybe_wrong", (
                SlotVariant(MAYBE_WRONG),
            )),
            ChapterSlot("more_to_him", (
                SlotVariant(MORE_TO_HIM, tension=Tension.SAFETY),
                SlotVariant(WHO_SHE_IS_WITH_HIM, tension=Tension.IDENTITY),
            )),
            ChapterSlot("keep_me_safe", (
                SlotVariant(KEEP_ME_SAFE, tension=Tension.SAFETY, triangle=True),
            )),
        ),
    ),
    Act(
        number=3,
        name="Retreat",
        descriptions={
            Tension.SAFETY: (
                "He does something that triggers her original wound. Everything she feared seems "
                "confirmed. She retreats to hatred because hatred is safer than heartbreak."
            ),
            Tension.IDENTITY: (
                "Her world makes her choose. Everything it said about him seems confirmed. She "
                "retreats into the role because the role is safer than the choice."
            ),
        },
        slots=(
            ChapterSlot("withdrawal", (
                SlotVariant(WITHDRAWAL, tension=Tension.SAFETY),
                SlotVariant(THE_CHOICE, tension=Tension.IDENTITY),
            )),
            ChapterSlot("dark_moment", (
                SlotVariant(DARK_MOMENT),
            )),
        ),
    ),
)

RESOLUTION_ACTS: Dict[ResolutionPath, Act] = {
    ResolutionPath.SAFETY_RESOLUTION: Act(
        number=4,
        name="Resolution",
        descriptions={
            Tension.SAFETY: (
                "She sees she hated him because she was afraid of what he made her feel. She "
                "chooses vulnerability over armour."
            ),
        },
        slots=(
            ChapterSlot("accepted_fate", (SlotVariant(ACCEPTED_FATE),)),
            ChapterSlot("discovers_truth", (SlotVariant(DISCOVERS_TRUTH, triangle=True),)),
            ChapterSlot("reunited", (SlotVariant(REUNITED),)),
            ChapterSlot("the_reversal", (SlotVariant(THE_REVERSAL, triangle=True),)),
            ChapterSlot("final", (
                SlotVariant(HEA_SAFETY, ending=Ending.HEA),
                SlotVariant(BITTERSWEET_ENDING, ending=Ending.BITTERSWEET),
            )),
        ),
    ),
    ResolutionPath.TRAGEDY: Act(
        number=4,
        name="Resolution",
        descriptions={
            Tension.SAFETY: (
                "She sees the truth too late. The armour she chose costs her the one person who "
                "saw through it."
            ),
        },
        slots=(
            ChapterSlot("accepted_fate_tragic", (SlotVariant(ACCEPTED_FATE_TRAGIC),)),
            ChapterSlot("truth_too_late", (SlotVariant(TRUTH_TOO_LATE, triangle=True),)),
            ChapterSlot("too_late", (SlotVariant(TOO_LATE),)),
            ChapterSlot("what_remains", (SlotVariant(WHAT_REMAINS),)),
        ),
    ),
    ResolutionPath.IDENTITY_HEA: Act(
        number=4,
        name="Resolution",
        descriptions={
            Tension.IDENTITY: (
                "She sees she hated him because he showed her who she really is. She chooses "
                "herself over the role."
            ),
        },
        slots=(
            ChapterSlot("choosing_herself", (SlotVariant(CHOOSING_HERSELF),)),
            ChapterSlot("final", (SlotVariant(HEA_IDENTITY),)),
        ),
    ),
}
