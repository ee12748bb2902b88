# reference_data.py
# Static lookup tables. Loaded once at import and never mutated.
from typing import Dict, List, Tuple

REFERENCE_DATA_VERSION = "2025-11-04"

DEFAULT_THREE_LETTER = "GBR"
DEFAULT_TWO_LETTER = "GB"
DEFAULT_PROVIDER_CODE = "UK"
DEFAULT_PHONE_CODE = "+44"

# -----------------------------------------------------------------------------
# Registry jurisdictions (two-letter, with sub-national US/UAE codes)
# -----------------------------------------------------------------------------
JURISDICTIONS: List[Tuple[str, str]] = [
    # UK & Crown Dependencies
    ("GB", "United Kingdom"),
    ("GG", "Guernsey"),
    ("JE", "Jersey"),
    ("IM", "Isle of Man"),
    ("GI", "Gibraltar"),

    # Europe
    ("AL", "Albania"),
    ("AD", "Andorra"),
    ("AT", "Austria"),
    ("BY", "Belarus"),
    ("BE", "Belgium"),
    ("BA", "Bosnia and Herzegovina"),
    ("BG", "Bulgaria"),
    ("HR", "Croatia"),
    ("CY", "Cyprus"),
    ("CZ", "Czech Republic"),
    ("DK", "Denmark"),
    ("EE", "Estonia"),
    ("FO", "Faroe Islands"),
    ("FI", "Finland"),
    ("FR", "France"),
    ("DE", "Germany"),
    ("GR", "Greece"),
    ("HU", "Hungary"),
    ("IS", "Iceland"),
    ("IE", "Ireland"),
    ("IT", "Italy"),
    ("XK", "Kosovo"),
    ("LV", "Latvia"),
    ("LI", "Liechtenstein"),
    ("LT", "Lithuania"),
    ("LU", "Luxembourg"),
    ("MK", "North Macedonia"),
    ("MT", "Malta"),
    ("MD", "Moldova"),
    ("MC", "Monaco"),
    ("ME", "Montenegro"),
    ("NL", "Netherlands"),
    ("NO", "Norway"),
    ("PL", "Poland"),
    ("PT", "Portugal"),
    ("RO", "Romania"),
    ("RU", "Russia"),
    ("SM", "San Marino"),
    ("RS", "Serbia"),
    ("SK", "Slovakia"),
    ("SI", "Slovenia"),
    ("ES", "Spain"),
    ("SE", "Sweden"),
    ("CH", "Switzerland"),
    ("TR", "Turkey"),
    ("UA", "Ukraine"),
    ("VA", "Vatican City"),

    # Americas
    ("CA", "Canada"),
    ("MX", "Mexico"),

    # United States (all 50 states + territories)
    ("US-AL", "United States - Alabama"),
    ("US-AK", "United States - Alaska"),
    ("US-AZ", "United States - Arizona"),
    ("US-AR", "United States - Arkansas"),
    ("US-CA", "United States - California"),
    ("US-CO", "United States - Colorado"),
    ("US-CT", "United States - Connecticut"),
    ("US-DE", "United States - Delaware"),
    ("US-DC", "United States - District of Columbia"),
    ("US-FL", "United States - Florida"),
    ("US-GA", "United States - Georgia"),
    ("US-HI", "United States - Hawaii"),
    ("US-ID", "United States - Idaho"),
    ("US-IL", "United States - Illinois"),
    ("US-IN", "United States - Indiana"),
    ("US-IA", "United States - Iowa"),
    ("US-KS", "United States - Kansas"),
    ("US-KY", "United States - Kentucky"),
    ("US-LA", "United States - Louisiana"),
    ("US-ME", "United States - Maine"),
    ("US-MD", "United States - Maryland"),
    ("US-MA", "United States - Massachusetts"),
    ("US-MI", "United States - Michigan"),
    ("US-MN", "United States - Minnesota"),
    ("US-MS", "United States - Mississippi"),
    ("US-MO", "United States - Missouri"),
    ("US-MT", "United States - Montana"),
    ("US-NE", "United States - Nebraska"),
    ("US-NV", "United States - Nevada"),
    ("US-NH", "United States - New Hampshire"),
    ("US-NJ", "United States - New Jersey"),
    ("US-NM", "United States - New Mexico"),
    ("US-NY", "United States - New York"),
    ("US-NC", "United States - North Carolina"),
    ("US-ND", "United States - North Dakota"),
    ("US-OH", "United States - Ohio"),
    ("US-OK", "United States - Oklahoma"),
    ("US-OR", "United States - Oregon"),
    ("US-PA", "United States - Pennsylvania"),
    ("US-RI", "United States - Rhode Island"),
    ("US-SC", "United States - South Carolina"),
    ("US-SD", "United States - South Dakota"),
    ("US-TN", "United States - Tennessee"),
    ("US-TX", "United States - Texas"),
    ("US-UT", "United States - Utah"),
    ("US-VT", "United States - Vermont"),
    ("US-VA", "United States - Virginia"),
    ("US-WA", "United States - Washington"),
    ("US-WV", "United States - West Virginia"),
    ("US-WI", "United States - Wisconsin"),
    ("US-WY", "United States - Wyoming"),
    ("US-AS", "United States - American Samoa"),
    ("US-GU", "United States - Guam"),
    ("US-MP", "United States - Northern Mariana Islands"),
    ("US-PR", "United States - Puerto Rico"),
    ("US-VI", "United States - US Virgin Islands"),

    # Central & South America
    ("AR", "Argentina"),
    ("BO", "Bolivia"),
    ("BR", "Brazil"),
    ("CL", "Chile"),
    ("CO", "Colombia"),
    ("CR", "Costa Rica"),
    ("EC", "Ecuador"),
    ("SV", "El Salvador"),
    ("GT", "Guatemala"),
    ("HN", "Honduras"),
    ("NI", "Nicaragua"),
    ("PA", "Panama"),
    ("PY", "Paraguay"),
    ("PE", "Peru"),
    ("UY", "Uruguay"),
    ("VE", "Venezuela"),

    # Caribbean
    ("AG", "Antigua and Barbuda"),
    ("BS", "Bahamas"),
    ("BB", "Barbados"),
    ("BZ", "Belize"),
    ("DM", "Dominica"),
    ("DO", "Dominican Republic"),
    ("GD", "Grenada"),
    ("JM", "Jamaica"),
    ("KN", "Saint Kitts and Nevis"),
    ("LC", "Saint Lucia"),
    ("VC", "Saint Vincent and the Grenadines"),
    ("TT", "Trinidad and Tobago"),

    # Asia-Pacific
    ("AU", "Australia"),
    ("NZ", "New Zealand"),
    ("CN", "China"),
    ("HK", "Hong Kong"),
    ("IN", "India"),
    ("ID", "Indonesia"),
    ("JP", "Japan"),
    ("MY", "Malaysia"),
    ("PH", "Philippines"),
    ("SG", "Singapore"),
    ("KR", "South Korea"),
    ("TW", "Taiwan"),
    ("TH", "Thailand"),
    ("VN", "Vietnam"),

    # Middle East
    ("BH", "Bahrain"),
    ("IL", "Israel"),
    ("JO", "Jordan"),
    ("KW", "Kuwait"),
    ("LB", "Lebanon"),
    ("OM", "Oman"),
    ("QA", "Qatar"),
    ("SA", "Saudi Arabia"),

    # United Arab Emirates (all 7 emirates)
    ("AE-AZ", "United Arab Emirates - Abu Dhabi"),
    ("AE-AJ", "United Arab Emirates - Ajman"),
    ("AE-DU", "United Arab Emirates - Dubai"),
    ("AE-FU", "United Arab Emirates - Fujairah"),
    ("AE-RK", "United Arab Emirates - Ras Al Khaimah"),
    ("AE-SH", "United Arab Emirates - Sharjah"),
    ("AE-UQ", "United Arab Emirates - Umm Al Quwain"),

    # Africa
    ("ZA", "South Africa"),
    ("EG", "Egypt"),
    ("GH", "Ghana"),
    ("KE", "Kenya"),
    ("MA", "Morocco"),
    ("NG", "Nigeria"),
    ("TN", "Tunisia"),
]

# -----------------------------------------------------------------------------
# Address countries (three-letter), GBR first
# -----------------------------------------------------------------------------
ADDRESS_COUNTRIES: List[Tuple[str, str]] = [
    ("GBR", "United Kingdom"),
    ("USA", "United States"),
    ("CAN", "Canada"),
    ("AUS", "Australia"),
    ("NZL", "New Zealand"),
    ("IRL", "Ireland"),
    ("FRA", "France"),
    ("DEU", "Germany"),
    ("ESP", "Spain"),
    ("ITA", "Italy"),
    ("PRT", "Portugal"),
    ("NLD", "Netherlands"),
    ("BEL", "Belgium"),
    ("CHE", "Switzerland"),
    ("AUT", "Austria"),
    ("DNK", "Denmark"),
    ("SWE", "Sweden"),
    ("NOR", "Norway"),
    ("FIN", "Finland"),
    ("POL", "Poland"),
    ("GRC", "Greece"),
    ("TUR", "Turkey"),
    ("RUS", "Russia"),
    ("CHN", "China"),
    ("JPN", "Japan"),
    ("IND", "India"),
    ("BRA", "Brazil"),
    ("MEX", "Mexico"),
    ("ZAF", "South Africa"),
    ("ARE", "United Arab Emirates"),
    ("SAU", "Saudi Arabia"),
    ("SGP", "Singapore"),
    ("HKG", "Hong Kong"),
    ("KOR", "South Korea"),
    ("ARG", "Argentina"),
    ("CHL", "Chile"),
    ("COL", "Colombia"),
    ("PER", "Peru"),
    ("VEN", "Venezuela"),
    ("EGY", "Egypt"),
    ("NGA", "Nigeria"),
    ("KEN", "Kenya"),
    ("MAR", "Morocco"),
    ("THA", "Thailand"),
    ("VNM", "Vietnam"),
    ("MYS", "Malaysia"),
    ("IDN", "Indonesia"),
    ("PHL", "Philippines"),
    ("PAK", "Pakistan"),
    ("BGD", "Bangladesh"),
    ("ISR", "Israel"),
    ("CZE", "Czech Republic"),
    ("HUN", "Hungary"),
    ("ROU", "Romania"),
    ("BGR", "Bulgaria"),
    ("HRV", "Croatia"),
    ("SVK", "Slovakia"),
    ("SVN", "Slovenia"),
    ("EST", "Estonia"),
    ("LVA", "Latvia"),
    ("LTU", "Lithuania"),
    ("ISL", "Iceland"),
    ("LUX", "Luxembourg"),
    ("MLT", "Malta"),
    ("CYP", "Cyprus"),
    ("UKR", "Ukraine"),
    ("BLR", "Belarus"),
    ("SRB", "Serbia"),
    ("BIH", "Bosnia and Herzegovina"),
    ("ALB", "Albania"),
    ("MKD", "North Macedonia"),
    ("MNE", "Montenegro"),
    ("KAZ", "Kazakhstan"),
    ("GEO", "Georgia"),
    ("ARM", "Armenia"),
    ("AZE", "Azerbaijan"),
    ("IRN", "Iran"),
    ("IRQ", "Iraq"),
    ("JOR", "Jordan"),
    ("LBN", "Lebanon"),
    ("KWT", "Kuwait"),
    ("OMN", "Oman"),
    ("QAT", "Qatar"),
    ("BHR", "Bahrain"),
    ("YEM", "Yemen"),
    ("SYR", "Syria"),
    ("AFG", "Afghanistan"),
    ("LKA", "Sri Lanka"),
    ("NPL", "Nepal"),
    ("MMR", "Myanmar"),
    ("KHM", "Cambodia"),
    ("LAO", "Laos"),
    ("TWN", "Taiwan"),
    ("MNG", "Mongolia"),
    ("PRK", "North Korea"),
]

# -----------------------------------------------------------------------------
# Phone calling codes (two-letter, calling code, display name), GB first
# -----------------------------------------------------------------------------
PHONE_COUNTRY_CODES: List[Tuple[str, str, str]] = [
    # UK Default
    ("GB", "+44", "UK"),

    # EU Countries
    ("AT", "+43", "Austria"),
    ("BE", "+32", "Belgium"),
    ("BG", "+359", "Bulgaria"),
    ("HR", "+385", "Croatia"),
    ("CY", "+357", "Cyprus"),
    ("CZ", "+420", "Czech Republic"),
    ("DK", "+45", "Denmark"),
    ("EE", "+372", "Estonia"),
    ("FI", "+358", "Finland"),
    ("FR", "+33", "France"),
    ("DE", "+49", "Germany"),
    ("GR", "+30", "Greece"),
    ("HU", "+36", "Hungary"),
    ("IE", "+353", "Ireland"),
    ("IT", "+39", "Italy"),
    ("LV", "+371", "Latvia"),
    ("LT", "+370", "Lithuania"),
    ("LU", "+352", "Luxembourg"),
    ("MT", "+356", "Malta"),
    ("NL", "+31", "Netherlands"),
    ("PL", "+48", "Poland"),
    ("PT", "+351", "Portugal"),
    ("RO", "+40", "Romania"),
    ("SK", "+421", "Slovakia"),
    ("SI", "+386", "Slovenia"),
    ("ES", "+34", "Spain"),
    ("SE", "+46", "Sweden"),

    # Major Countries
    ("AR", "+54", "Argentina"),
    ("AU", "+61", "Australia"),
    ("BR", "+55", "Brazil"),
    ("CA", "+1", "Canada"),
    ("CN", "+86", "China"),
    ("MX", "+52", "Mexico"),
    ("NZ", "+64", "New Zealand"),
    ("NO", "+47", "Norway"),
    ("SG", "+65", "Singapore"),
    ("ZA", "+27", "South Africa"),
    ("CH", "+41", "Switzerland"),
    ("TR", "+90", "Turkey"),
    ("US", "+1", "USA"),

    # Other Countries (alphabetical)
    ("AF", "+93", "Afghanistan"),
    ("AL", "+355", "Albania"),
    ("DZ", "+213", "Algeria"),
    ("AD", "+376", "Andorra"),
    ("AO", "+244", "Angola"),
    ("AM", "+374", "Armenia"),
    ("AZ", "+994", "Azerbaijan"),
    ("BH", "+973", "Bahrain"),
    ("BD", "+880", "Bangladesh"),
    ("BY", "+375", "Belarus"),
    ("BZ", "+501", "Belize"),
    ("BT", "+975", "Bhutan"),
    ("BO", "+591", "Bolivia"),
    ("BA", "+387", "Bosnia"),
    ("BW", "+267", "Botswana"),
    ("BN", "+673", "Brunei"),
    ("KH", "+855", "Cambodia"),
    ("CM", "+237", "Cameroon"),
    ("CL", "+56", "Chile"),
    ("CO", "+57", "Colombia"),
    ("CR", "+506", "Costa Rica"),
    ("CI", "+225", "Côte d'Ivoire"),
    ("EC", "+593", "Ecuador"),
    ("EG", "+20", "Egypt"),
    ("SV", "+503", "El Salvador"),
    ("ET", "+251", "Ethiopia"),
    ("GE", "+995", "Georgia"),
    ("GH", "+233", "Ghana"),
    ("GT", "+502", "Guatemala"),
    ("HN", "+504", "Honduras"),
    ("HK", "+852", "Hong Kong"),
    ("IS", "+354", "Iceland"),
    ("IN", "+91", "India"),
    ("ID", "+62", "Indonesia"),
    ("IR", "+98", "Iran"),
    ("IQ", "+964", "Iraq"),
    ("IL", "+972", "Israel"),
    ("JP", "+81", "Japan"),
    ("JO", "+962", "Jordan"),
    ("KZ", "+7", "Kazakhstan"),
    ("KE", "+254", "Kenya"),
    ("KW", "+965", "Kuwait"),
    ("KG", "+996", "Kyrgyzstan"),
    ("LA", "+856", "Laos"),
    ("LB", "+961", "Lebanon"),
    ("LY", "+218", "Libya"),
    ("MO", "+853", "Macau"),
    ("MK", "+389", "Macedonia"),
    ("MG", "+261", "Madagascar"),
    ("MY", "+60", "Malaysia"),
    ("MV", "+960", "Maldives"),
    ("ML", "+223", "Mali"),
    ("MA", "+212", "Morocco"),
    ("MZ", "+258", "Mozambique"),
    ("MM", "+95", "Myanmar"),
    ("NA", "+264", "Namibia"),
    ("NP", "+977", "Nepal"),
    ("NI", "+505", "Nicaragua"),
    ("NG", "+234", "Nigeria"),
    ("OM", "+968", "Oman"),
    ("PK", "+92", "Pakistan"),
    ("PA", "+507", "Panama"),
    ("PY", "+595", "Paraguay"),
    ("PE", "+51", "Peru"),
    ("PH", "+63", "Philippines"),
    ("QA", "+974", "Qatar"),
    ("RU", "+7", "Russia"),
    ("SA", "+966", "Saudi Arabia"),
    ("RS", "+381", "Serbia"),
    ("KR", "+82", "South Korea"),
    ("LK", "+94", "Sri Lanka"),
    ("SD", "+249", "Sudan"),
    ("SY", "+963", "Syria"),
    ("TW", "+886", "Taiwan"),
    ("TJ", "+992", "Tajikistan"),
    ("TZ", "+255", "Tanzania"),
    ("TH", "+66", "Thailand"),
    ("TN", "+216", "Tunisia"),
    ("TM", "+993", "Turkmenistan"),
    ("UG", "+256", "Uganda"),
    ("UA", "+380", "Ukraine"),
    ("AE", "+971", "UAE"),
    ("UY", "+598", "Uruguay"),
    ("UZ", "+998", "Uzbekistan"),
    ("VE", "+58", "Venezuela"),
    ("VN", "+84", "Vietnam"),
    ("YE", "+967", "Yemen"),
    ("ZM", "+260", "Zambia"),
    ("ZW", "+263", "Zimbabwe"),
]

# -----------------------------------------------------------------------------
# Two-letter -> three-letter crosswalk
# -----------------------------------------------------------------------------
TWO_TO_THREE: Dict[str, str] = {
    "AD": "AND", "AE": "ARE", "AF": "AFG", "AG": "ATG", "AL": "ALB", "AM": "ARM",
    "AO": "AGO", "AR": "ARG", "AS": "ASM", "AT": "AUT", "AU": "AUS", "AZ": "AZE",
    "BA": "BIH", "BB": "BRB", "BD": "BGD", "BE": "BEL", "BG": "BGR", "BH": "BHR",
    "BN": "BRN", "BO": "BOL", "BR": "BRA", "BS": "BHS", "BT": "BTN", "BW": "BWA",
    "BY": "BLR", "BZ": "BLZ", "CA": "CAN", "CH": "CHE", "CI": "CIV", "CL": "CHL",
    "CM": "CMR", "CN": "CHN", "CO": "COL", "CR": "CRI", "CY": "CYP", "CZ": "CZE",
    "DE": "DEU", "DK": "DNK", "DM": "DMA", "DO": "DOM", "DZ": "DZA", "EC": "ECU",
    "EE": "EST", "EG": "EGY", "ES": "ESP", "ET": "ETH", "FI": "FIN", "FO": "FRO",
    "FR": "FRA", "GB": "GBR", "GD": "GRD", "GE": "GEO", "GG": "GGY", "GH": "GHA",
    "GI": "GIB", "GR": "GRC", "GT": "GTM", "GU": "GUM", "HK": "HKG", "HN": "HND",
    "HR": "HRV", "HU": "HUN", "ID": "IDN", "IE": "IRL", "IL": "ISR", "IM": "IMN",
    "IN": "IND", "IQ": "IRQ", "IR": "IRN", "IS": "ISL", "IT": "ITA", "JE": "JEY",
    "JM": "JAM", "JO": "JOR", "JP": "JPN", "KE": "KEN", "KG": "KGZ", "KH": "KHM",
    "KN": "KNA", "KP": "PRK", "KR": "KOR", "KW": "KWT", "KZ": "KAZ", "LA": "LAO",
    "LB": "LBN", "LC": "LCA", "LI": "LIE", "LK": "LKA", "LT": "LTU", "LU": "LUX",
    "LV": "LVA", "LY": "LBY", "MA": "MAR", "MC": "MCO", "MD": "MDA", "ME": "MNE",
    "MG": "MDG", "MK": "MKD", "ML": "MLI", "MM": "MMR", "MN": "MNG", "MO": "MAC",
    "MP": "MNP", "MT": "MLT", "MV": "MDV", "MX": "MEX", "MY": "MYS", "MZ": "MOZ",
    "NA": "NAM", "NG": "NGA", "NI": "NIC", "NL": "NLD", "NO": "NOR", "NP": "NPL",
    "NZ": "NZL", "OM": "OMN", "PA": "PAN", "PE": "PER", "PH": "PHL", "PK": "PAK",
    "PL": "POL", "PR": "PRI", "PT": "PRT", "PY": "PRY", "QA": "QAT", "RO": "ROU",
    "RS": "SRB", "RU": "RUS", "SA": "SAU", "SD": "SDN", "SE": "SWE", "SG": "SGP",
    "SI": "SVN", "SK": "SVK", "SM": "SMR", "SV": "SLV", "SY": "SYR", "TH": "THA",
    "TJ": "TJK", "TM": "TKM", "TN": "TUN", "TR": "TUR", "TT": "TTO", "TW": "TWN",
    "TZ": "TZA", "UA": "UKR", "UG": "UGA", "US": "USA", "UY": "URY", "UZ": "UZB",
    "VA": "VAT", "VC": "VCT", "VE": "VEN", "VI": "VIR", "VN": "VNM", "XK": "XKX",
    "YE": "YEM", "ZA": "ZAF", "ZM": "ZMB", "ZW": "ZWE",
}

THREE_TO_TWO: Dict[str, str] = {three: two for two, three in TWO_TO_THREE.items()}

# Provider-specific spellings. Anything not listed uses its two-letter code.
PROVIDER_CODE_OVERRIDES: Dict[str, str] = {
    "GB": "UK",
}

# Aliases people actually type into the jurisdiction box
JURISDICTION_ALIASES: Dict[str, str] = {
    "UK": "GB",
    "ENGLAND": "GB",
    "SCOTLAND": "GB",
    "WALES": "GB",
    "NORTHERN IRELAND": "GB",
    "GREAT BRITAIN": "GB",
    "UNITED STATES OF AMERICA": "US",
    "UAE": "AE",
}

# Countries where the provider supports international address verification
INTERNATIONAL_VERIFICATION_COUNTRIES = frozenset({
    "AUS", "AUT", "BEL", "BRA", "CAN", "DNK", "FRA", "DEU",
    "ITA", "NZL", "NOR", "ESP", "NLD", "SWE", "CHE", "USA",
})

# Countries whose canonical address is line-based with a state/province
STATE_ADDRESS_COUNTRIES = frozenset({"USA", "CAN"})

# -----------------------------------------------------------------------------
# Identity documents
# -----------------------------------------------------------------------------
# Display kind -> provider document type, in auto-pick priority order
PHOTO_ID_KINDS: List[Tuple[str, str]] = [
    ("Passport", "passport"),
    ("Driving Licence", "driving_licence"),
    ("Passport Card", "national_identity_card"),
    ("National Identity Card", "national_identity_card"),
    ("Residence Permit", "residence_permit"),
    ("Other Photo ID Card", "other"),
]

SINGLE_SIDED_DOCUMENT_TYPES = frozenset({"passport"})

PHOTO_ID_IMAGE_TYPE = "PhotoID"
ADDRESS_ID_IMAGE_TYPE = "Address ID"

# -----------------------------------------------------------------------------
# Rule-based ID catalogue
# -----------------------------------------------------------------------------
# (rule_id, label, applies_to, statement); applies_to is "all" or "entity"
RULE_CATALOGUE: List[Tuple[str, str, str, str]] = [
    ("rule1", "Rule 1 - Pass/ePass already held", "all",
     "We already hold a [Pass/ePass] result valid to ....-...... on matter ........../... "
     "for this client which is sufficient to process a form K [RULE 1] AND this matter is "
     "not a sale. I attach both the CDF and a recent OFSI for the client."),
    ("rule2", "Rule 2 - ID already Held", "all",
     "We already hold an [ID Held] result valid to ....-...... on matter ........../... "
     "for this client which is sufficient to conduct an electronic check under form K "
     "[RULE 2] AND this is not a sale. I attach both the CDF and a recent OFSI for the client."),
    ("rule3", "Rule 3 - This matter is out of scope", "all",
     "This matter is out of scope and we hold TWO valid forms of address ID and ONE valid "
     "form of Photo ID for the client sufficient to process a form K [RULE 3]. I attach "
     "both the CDF and a recent OFSI for the client."),
    ("rule4", "Rule 4 - Company", "entity",
     "The client is a company and we enclose a print out from companies house of the "
     "register entry sufficient to process a form K [RULE 4]. I attach a recent OFSI for "
     "the client."),
    ("rule5", "Rule 5 - Partnership", "entity",
     "The client is a partnership and we enclose a print out from companies house of the "
     "register entry or proof of address for the partnership sufficient to process a "
     "form K [RULE 5]. I attach a recent OFSI for the client."),
    ("rule6", "Rule 6 - Charity", "entity",
     "The client is a charity and we enclose a print out from the charity register of the "
     "entry including a list of all registered officers sufficient to process a form K "
     "[RULE 6]. I attach a recent OFSI for the client."),
    ("rule7", "Rule 7 - PLC", "entity",
     "The client is a PLC and we enclose a print out from the stock exchange of the "
     "registration sufficient to process a form K [RULE 7]. I attach a recent OFSI check "
     "for the client."),
    ("rule8", "Rule 8 - Government/Council", "entity",
     "The client is a government/council department and we enclose proof of its status "
     "sufficient to process a form K [RULE 8]. I attach a recent OFSI check for the client."),
    ("rule9", "Rule 9 - Regulated Institution", "entity",
     "The client is a regulated professional and we enclose proof of the registration "
     "with the regulatory body sufficient to process a form K [RULE 9]. I attach a recent "
     "OFSI check for the client."),
    ("rule10", "Rule 10 - Regulated referral", "all",
     "The client has been identified by a regulated professional and proof of reliance on "
     "their checks is included along with a recent OFSI check sufficient to process a "
     "form K [RULE 10]."),
    ("rule11", "Rule 11 - Thirdfort Secure Share", "all",
     "The client has conducted a Thirdfort Check in the last 6 months which has been "
     "securely shared to the firm sufficient to process a form K [RULE 11]."),
]

# Substrings of the work type that make rule 3 (out of scope) usable
RULE3_WORK_TYPES: Tuple[str, ...] = (
    "will", "lpa", "lasting power of attorney", "lasting powers of attorney",
    "deeds & declarations",
)


def jurisdiction_name(code: str) -> str:
    for c, name in JURISDICTIONS:
        if c == code:
            return name
    return ""


def country_name(three_letter: str) -> str:
    for c, name in ADDRESS_COUNTRIES:
        if c == three_letter:
            return name
    return ""
