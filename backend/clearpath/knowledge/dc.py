from datetime import date

from .base import (
    NON_CONVICTION,
    ExcludedOffense,
    Jurisdiction,
    Offense,
    ReliefType,
    Requirement,
    SpecialProgram,
    WaitingPeriod,
)
from .dc_templates import DC_DOCUMENT_TEMPLATES

SEALING = frozenset({"automatic_sealing", "motion_sealing"})

DC_EXCLUDED_OFFENSES = (
    ExcludedOffense(
        id="intrafamily_offenses",
        category="Domestic Violence",
        description=(
            "Intrafamily offenses including domestic violence, stalking, "
            "and protective order violations"
        ),
        statutes=("D.C. Code § 16-1001(8)",),
        excluded_from=SEALING,
        reasoning="Public safety concerns and victim protection",
        keywords=(
            "domestic violence", "stalking", "protective order",
            "restraining order", "intrafamily",
        ),
    ),
    ExcludedOffense(
        id="sexual_offenses",
        category="Sexual Offenses",
        description="Misdemeanor sexual abuse and sexual performances by minors",
        statutes=("D.C. Code § 22-3006", "Chapter 31A"),
        excluded_from=SEALING,
        reasoning="Public safety and protection of vulnerable populations",
        keywords=(
            "sexual abuse", "sexual assault", "sexual performance",
            "indecent exposure",
        ),
    ),
    ExcludedOffense(
        id="crimes_of_violence",
        category="Crimes of Violence",
        description="Armed robbery, assault with deadly weapon, and other violent crimes",
        statutes=("D.C. Code § 23-1331(4)",),
        excluded_from=SEALING,
        reasoning="Serious violent nature poses ongoing public safety risk",
        keywords=(
            "armed robbery", "assault with a deadly weapon", "assault deadly weapon",
            "carjacking", "robbery", "aggravated assault",
        ),
    ),
    ExcludedOffense(
        id="dui_dwi",
        category="Impaired Driving",
        description="All DUI/DWI and impaired driving offenses",
        statutes=("D.C. Code § 50-2206.11", "§ 50-2206.12", "§ 50-2206.14"),
        excluded_from=SEALING,
        reasoning="Public safety concerns related to impaired driving",
        keywords=(
            "dui", "dwi", "driving under influence", "driving under the influence",
            "operating while impaired", "drunk driving", "owi",
        ),
    ),
    ExcludedOffense(
        id="weapons_violations",
        category="Weapons Offenses",
        description="All Chapter 30A weapons violations",
        statutes=("Chapter 30A",),
        excluded_from=SEALING,
        reasoning="Public safety concerns related to weapons possession",
        keywords=(
            "weapon", "firearm", "gun", "carrying pistol", "concealed weapon",
        ),
    ),
    ExcludedOffense(
        id="child_abuse",
        category="Child Abuse and Neglect",
        description=(
            "Abuse, neglect, or financial exploitation of children or "
            "vulnerable adults"
        ),
        statutes=("D.C. Code § 22-933", "§ 22-933.01", "§ 22-1102"),
        excluded_from=SEALING,
        reasoning="Protection of vulnerable populations",
        keywords=(
            "child abuse", "child neglect", "vulnerable adult", "elderly abuse",
            "exploitation",
        ),
    ),
    ExcludedOffense(
        id="failure_to_appear",
        category="Failure to Appear",
        description="Failure to appear in court (excluded from automatic sealing only)",
        statutes=("Various",),
        # still eligible for motion sealing
        excluded_from=frozenset({"automatic_sealing"}),
        reasoning="Administrative concerns about court compliance",
        keywords=("failure to appear", "fta", "bench warrant"),
    ),
)

ALL_EXCLUSIONS = frozenset(e.id for e in DC_EXCLUDED_OFFENSES)

DC_RELIEF_TYPES = (
    ReliefType(
        id="automatic_expungement",
        name="Automatic Expungement",
        description="Automatic removal of eligible records without filing required",
        requirements=(
            Requirement(
                id="decriminalized_offense",
                description="Offense must have been subsequently decriminalized",
                type="documentation",
            ),
        ),
        eligibility_standard="automatic",
        priority=1,
        timeline="Within 90 days of case termination or by October 2027",
        document_types=(
            "petition_expungement", "certificate_of_service", "proposed_order",
        ),
    ),
    ReliefType(
        id="automatic_sealing",
        name="Automatic Sealing",
        description="Automatic sealing of eligible records without filing required",
        requirements=(
            Requirement(
                id="waiting_period",
                description="Applicable waiting period must be completed",
                type="waiting_period",
            ),
            Requirement(
                id="sentence_completion",
                description="All sentence requirements must be completed",
                type="completion",
            ),
        ),
        eligibility_standard="automatic",
        exclusions=ALL_EXCLUSIONS,
        waiting_period_years=10,
        priority=2,
        timeline="Should be completed by January 1, 2027",
        document_types=(
            "petition_sealing", "certificate_of_service", "proposed_order",
        ),
    ),
    ReliefType(
        id="motion_expungement",
        name="Motion for Expungement (Actual Innocence)",
        description="Court-ordered expungement based on actual innocence",
        requirements=(
            Requirement(
                id="actual_innocence",
                description=(
                    "Prove by preponderance of evidence that offense did not "
                    "occur or was committed by someone else"
                ),
                type="court_filing",
            ),
        ),
        eligibility_standard="actual_innocence",
        priority=3,
        timeline="Court must decide within 180 days",
        attorney_recommended=True,
        document_types=(
            "petition_actual_innocence", "affidavit_actual_innocence",
            "certificate_of_service", "proposed_order",
        ),
    ),
    ReliefType(
        id="motion_sealing",
        name="Motion for Sealing (Interests of Justice)",
        description="Court-ordered sealing based on interests of justice standard",
        requirements=(
            Requirement(
                id="interests_of_justice",
                description="Demonstrate that sealing serves the interests of justice",
                type="court_filing",
            ),
            Requirement(
                id="waiting_period",
                description="Applicable waiting period must be completed",
                type="waiting_period",
            ),
        ),
        eligibility_standard="interests_of_justice",
        exclusions=ALL_EXCLUSIONS - {"failure_to_appear"},
        waiting_period_years=5,
        priority=4,
        timeline="Court typically decides within 6 months",
        filing_fee=50,
        fee_waiver_available=True,
        attorney_recommended=True,
        document_types=(
            "petition_sealing", "certificate_of_service", "proposed_order",
        ),
    ),
)

DC_SPECIAL_PROGRAMS = (
    SpecialProgram(
        id="youth_rehabilitation_act",
        name="Youth Rehabilitation Act",
        description="Special consideration for offenses committed under age 25",
        eligibility_requirements=(
            "Age 24 or younger at time of offense",
            "Successfully completed sentence",
            "No subsequent convictions",
        ),
        benefits=(
            "Enhanced sealing eligibility",
            "Reduced waiting periods",
            "Special consideration for employment",
        ),
        application_process=(
            "File motion with DC Superior Court",
            "Provide evidence of rehabilitation",
            "Demonstrate community benefit",
        ),
        max_age_at_offense=24,
    ),
    SpecialProgram(
        id="trafficking_survivors",
        name="Human Trafficking Survivors Relief",
        description="Special relief for victims of human trafficking",
        eligibility_requirements=(
            "Evidence of being a trafficking victim",
            "Offense related to trafficking situation",
            "Cooperation with law enforcement (if applicable)",
        ),
        benefits=(
            "Expedited processing",
            "Waived filing fees",
            "Enhanced privacy protections",
        ),
        application_process=(
            "File specialized motion",
            "Provide trafficking documentation",
            "Work with victim services",
        ),
        requires_trafficking_victim=True,
    ),
)

DC_WAITING_PERIODS = (
    WaitingPeriod(relief_type="automatic_sealing", offense_type="misdemeanor", years=10),
    WaitingPeriod(relief_type="motion_sealing", offense_type="misdemeanor", years=5),
    WaitingPeriod(relief_type="motion_sealing", offense_type="felony", years=8),
    WaitingPeriod(relief_type="automatic_sealing", offense_type=NON_CONVICTION, years=0),
    WaitingPeriod(relief_type="motion_sealing", offense_type=NON_CONVICTION, years=0),
)

# Declaration order breaks keyword ties during classification.
DC_OFFENSES = (
    Offense(
        id="marijuana_simple_possession",
        name="Simple Possession of Marijuana",
        keywords=(
            "marijuana", "cannabis", "simple possession marijuana", "weed",
        ),
        statutes=("D.C. Code § 48-1201",),
        severity="misdemeanor",
        category="drug",
        special_considerations=(
            "Automatic expungement if offense occurred before February 15, 2015",
        ),
    ),
    Offense(
        id="simple_assault",
        name="Simple Assault",
        keywords=("simple assault", "assault", "fighting", "battery"),
        statutes=("D.C. Code § 22-404",),
        severity="misdemeanor",
        category="assault",
    ),
    Offense(
        id="theft_second_degree",
        name="Theft in the Second Degree",
        keywords=("theft", "stealing", "larceny", "shoplifting"),
        statutes=("D.C. Code § 22-3212",),
        severity="misdemeanor",
        category="theft",
    ),
    Offense(
        id="disorderly_conduct",
        name="Disorderly Conduct",
        keywords=("disorderly conduct", "public disturbance", "breach of peace"),
        statutes=("D.C. Code § 22-1321",),
        severity="misdemeanor",
        category="public_order",
    ),
    Offense(
        id="unlawful_entry",
        name="Unlawful Entry",
        keywords=("unlawful entry", "trespassing", "breaking and entering"),
        statutes=("D.C. Code § 22-3302",),
        severity="misdemeanor",
        category="property",
    ),
    Offense(
        id="dui",
        name="Driving Under the Influence",
        keywords=("dui", "dwi", "drunk driving", "impaired driving", "owi"),
        statutes=("D.C. Code § 50-2206.11",),
        severity="misdemeanor",
        category="traffic",
        is_excluded=True,
        excluded_from=SEALING,
        special_considerations=("Excluded from all sealing relief",),
    ),
    Offense(
        id="domestic_violence",
        name="Domestic Violence",
        keywords=("domestic violence", "intrafamily offense", "domestic assault"),
        statutes=("D.C. Code § 16-1001",),
        severity="misdemeanor",
        category="domestic",
        is_excluded=True,
        excluded_from=SEALING,
        special_considerations=("Excluded from all sealing relief",),
    ),
    Offense(
        id="carrying_pistol",
        name="Carrying a Pistol Without a License",
        keywords=("carrying pistol", "weapon", "firearm", "gun", "cpwl"),
        statutes=("D.C. Code § 22-4504",),
        severity="felony",
        category="weapons",
        is_excluded=True,
        excluded_from=SEALING,
        special_considerations=("Excluded from all sealing relief",),
    ),
    Offense(
        id="possession_controlled_substance",
        name="Possession of Controlled Substance",
        keywords=(
            "possession controlled substance",
            "possession of controlled substance",
            "possession of a controlled substance",
            "drug possession",
            "narcotics",
        ),
        statutes=("D.C. Code § 48-904.01",),
        severity="misdemeanor",
        category="drug",
    ),
    Offense(
        id="failure_to_appear",
        name="Failure to Appear",
        keywords=("failure to appear", "fta", "bench warrant"),
        statutes=("Various",),
        severity="misdemeanor",
        category="administrative",
        is_excluded=True,
        excluded_from=frozenset({"automatic_sealing"}),
        special_considerations=("Excluded from automatic sealing only",),
    ),
    Offense(
        id="public_urination",
        name="Public Urination",
        keywords=("public urination", "urinating in public"),
        statutes=("D.C. Code § 22-1321",),
        severity="infraction",
        category="public_order",
    ),
    Offense(
        id="metro_fare_evasion",
        name="Metro Fare Evasion",
        keywords=("fare evasion", "metro", "subway", "transit"),
        statutes=("WMATA regulations",),
        severity="infraction",
        category="transit",
    ),
)

DC_JURISDICTION = Jurisdiction(
    id="dc",
    name="Washington, DC",
    effective_date=date(2023, 1, 1),
    court_name="Superior Court of the District of Columbia",
    fee_payable_to="D.C. Superior Court",
    offenses=DC_OFFENSES,
    relief_types=DC_RELIEF_TYPES,
    excluded_offenses=DC_EXCLUDED_OFFENSES,
    special_programs=DC_SPECIAL_PROGRAMS,
    waiting_periods=DC_WAITING_PERIODS,
    document_templates=DC_DOCUMENT_TEMPLATES,
)
