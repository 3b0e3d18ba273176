"""Filing-document templates for the Superior Court of the District of Columbia.

Bodies are Jinja2 sources rendered against the context built by
``clearpath.engine.document_generator``: ``personal``, ``case``,
``offense_name``, ``relief``, ``court_name``, ``filing_date``,
``completion_date`` and ``trafficking_victim``.
"""

from .base import DocumentTemplate

_CAPTION = """\
SUPERIOR COURT OF THE DISTRICT OF COLUMBIA
CRIMINAL DIVISION

{{ personal.first_name }} {{ personal.last_name }},        Case No. {{ case.case_number or "____________" }}
                    Petitioner
"""

_SIGNATURE = """\
Respectfully submitted,

_________________________
{{ personal.first_name }} {{ personal.last_name }}
Petitioner
{% if personal.attorney_name %}

_________________________
{{ personal.attorney_name }}
D.C. Bar No. {{ personal.attorney_bar_number or "__________" }}
Attorney for Petitioner
{% endif %}
"""

_PETITIONER_FIELDS = (
    "personal.first_name",
    "personal.last_name",
    "personal.date_of_birth",
    "personal.address",
    "case.offense_date",
    "offense_name",
)

PETITION_EXPUNGEMENT = DocumentTemplate(
    document_type="petition_expungement",
    title="Petition for Expungement of Criminal Records",
    required_fields=_PETITIONER_FIELDS,
    required_copies=3,
    special_instructions=(
        "Must be notarized",
        "Attach certified copies of court records",
    ),
    body=_CAPTION + """
PETITION FOR EXPUNGEMENT OF CRIMINAL RECORDS

Petitioner {{ personal.first_name }} {{ personal.last_name }} respectfully petitions this Court for an order expunging all records relating to the arrest and prosecution in the above-captioned case, and states:

1. Petitioner's date of birth is {{ personal.date_of_birth | longdate }}.
2. Petitioner's current address is {{ personal.address }}.
3. On {{ case.offense_date | longdate }}, Petitioner was {{ "convicted of" if case.is_conviction else "charged with" }} {{ offense_name }}.
{% if case.is_conviction %}
4. Petitioner {{ "has completed all requirements of the sentence" if case.sentence and case.sentence.all_completed else "has sentence requirements pending completion" }}.
{% else %}
4. The case was resolved with a disposition of {{ case.outcome | replace("_", " ") }}.
{% endif %}
{% if trafficking_victim %}
5. Petitioner was a victim of human trafficking at the time of the offense.
{% endif %}

Relief under {{ relief.name }} is normally applied without a filing. Petitioner files this petition because the record has not been cleared.

WHEREFORE, Petitioner requests that this Court enter an order expunging all records of the above-captioned case and directing all agencies to remove records related to this case.

""" + _SIGNATURE,
)

PETITION_SEALING = DocumentTemplate(
    document_type="petition_sealing",
    title="Motion to Seal Criminal Records",
    required_fields=_PETITIONER_FIELDS,
    required_copies=3,
    special_instructions=("Attach certified copies of court records",),
    body=_CAPTION + """
MOTION TO SEAL CRIMINAL RECORDS ({{ relief.name | upper }})

Petitioner {{ personal.first_name }} {{ personal.last_name }}, born {{ personal.date_of_birth | longdate }}, residing at {{ personal.address }}, moves this Court to seal all records relating to the {{ offense_name }} case arising on {{ case.offense_date | longdate }}.

{% if case.is_conviction %}
Petitioner was convicted and completed the sentence on {{ completion_date | longdate if completion_date else "a date to be supplied" }}.
{% else %}
The case ended without conviction ({{ case.outcome | replace("_", " ") }}).
{% endif %}
{% if relief.eligibility_standard == "interests_of_justice" %}
Sealing serves the interests of justice: Petitioner has demonstrated rehabilitation, sealing benefits the community, and Petitioner presents minimal risk to public safety.
{% endif %}

WHEREFORE, Petitioner requests that this Court order the records of this case sealed.

""" + _SIGNATURE,
)

PETITION_ACTUAL_INNOCENCE = DocumentTemplate(
    document_type="petition_actual_innocence",
    title="Motion for Expungement Based on Actual Innocence",
    required_fields=_PETITIONER_FIELDS,
    required_copies=3,
    special_instructions=(
        "Must include new evidence of innocence",
        "Consider attorney representation for complex cases",
    ),
    body=_CAPTION + """
MOTION FOR EXPUNGEMENT BASED ON ACTUAL INNOCENCE

Petitioner {{ personal.first_name }} {{ personal.last_name }}, born {{ personal.date_of_birth | longdate }}, residing at {{ personal.address }}, moves this Court to expunge all records of the {{ offense_name }} case arising on {{ case.offense_date | longdate }}.

Petitioner will show by a preponderance of the evidence that the offense did not occur or was committed by another person. No waiting period applies to this motion.

""" + _SIGNATURE,
)

AFFIDAVIT_ACTUAL_INNOCENCE = DocumentTemplate(
    document_type="affidavit_actual_innocence",
    title="Affidavit in Support of Actual Innocence",
    required_fields=(
        "personal.first_name", "personal.last_name", "case.offense_date", "offense_name",
    ),
    required_copies=3,
    body="""\
AFFIDAVIT OF {{ personal.first_name | upper }} {{ personal.last_name | upper }}

I, {{ personal.first_name }} {{ personal.last_name }}, state under penalty of perjury:

1. I did not commit the {{ offense_name }} offense charged on {{ case.offense_date | longdate }}.
2. The facts supporting my innocence are set out in the attached statement.

_________________________
{{ personal.first_name }} {{ personal.last_name }}

Subscribed and sworn before me on _________________.

_________________________
Notary Public
""",
)

CERTIFICATE_OF_SERVICE = DocumentTemplate(
    document_type="certificate_of_service",
    title="Certificate of Service",
    required_fields=("personal.first_name", "personal.last_name"),
    required_copies=2,
    special_instructions=(
        "Must be filed within 3 days of service",
        "Include proof of service method",
    ),
    body=_CAPTION + """
CERTIFICATE OF SERVICE

I certify that on {{ filing_date | longdate }} a true copy of the foregoing {{ relief.name }} filing was served upon:

United States Attorney's Office
District of Columbia
555 4th Street, N.W.
Washington, D.C. 20530

Metropolitan Police Department
Records Division
300 Indiana Avenue, N.W.
Washington, D.C. 20001

_________________________
{{ personal.first_name }} {{ personal.last_name }}
""",
)

PROPOSED_ORDER = DocumentTemplate(
    document_type="proposed_order",
    title="Proposed Order",
    required_fields=("personal.first_name", "personal.last_name", "offense_name"),
    required_copies=3,
    body=_CAPTION + """
[PROPOSED] ORDER

Upon consideration of the {{ relief.name }} filed by {{ personal.first_name }} {{ personal.last_name }}, it is hereby

ORDERED that the motion is GRANTED; and it is further

ORDERED that all records of the {{ offense_name }} case shall be {{ "expunged" if "expungement" in relief.id else "sealed" }}.

_________________________
Judge, {{ court_name }}
""",
)

CERTIFICATE_COMPLETION = DocumentTemplate(
    document_type="certificate_completion",
    title="Certificate of Sentence Completion",
    required_fields=("personal.first_name", "personal.last_name", "completion_date"),
    required_copies=2,
    body="""\
CERTIFICATE OF SENTENCE COMPLETION

{{ personal.first_name }} {{ personal.last_name }} certifies that every requirement of the sentence imposed for {{ offense_name }} was completed on {{ completion_date | longdate }}.

_________________________
{{ personal.first_name }} {{ personal.last_name }}
""",
)

PROBATION_COMPLETION = DocumentTemplate(
    document_type="probation_completion_certificate",
    title="Certificate of Probation Completion",
    required_fields=(
        "personal.first_name",
        "personal.last_name",
        "case.sentence.probation_months",
        "completion_date",
    ),
    required_copies=2,
    body="""\
CERTIFICATE OF PROBATION COMPLETION

{{ personal.first_name }} {{ personal.last_name }} completed a {{ case.sentence.probation_months }}-month term of probation on {{ completion_date | longdate }}.

_________________________
Court Services and Offender Supervision Agency
""",
)

TRAFFICKING_VICTIM_AFFIDAVIT = DocumentTemplate(
    document_type="trafficking_victim_affidavit",
    title="Affidavit of Human Trafficking Survivor",
    required_fields=("personal.first_name", "personal.last_name", "offense_name"),
    required_copies=3,
    special_instructions=(
        "May require supporting documentation from service providers",
    ),
    body="""\
AFFIDAVIT OF HUMAN TRAFFICKING SURVIVOR

I, {{ personal.first_name }} {{ personal.last_name }}, state under penalty of perjury that I was a victim of human trafficking and that the {{ offense_name }} offense was connected to that situation.

_________________________
{{ personal.first_name }} {{ personal.last_name }}
""",
)

DC_DOCUMENT_TEMPLATES = {
    t.document_type: t
    for t in (
        PETITION_EXPUNGEMENT,
        PETITION_SEALING,
        PETITION_ACTUAL_INNOCENCE,
        AFFIDAVIT_ACTUAL_INNOCENCE,
        CERTIFICATE_OF_SERVICE,
        PROPOSED_ORDER,
        CERTIFICATE_COMPLETION,
        PROBATION_COMPLETION,
        TRAFFICKING_VICTIM_AFFIDAVIT,
    )
}
