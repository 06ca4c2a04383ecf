"""Closed vocabularies shared by the directory models.

Values are the exact labels shown to visitors and stored in the database.
"""
import enum


class ServiceOffered(str, enum.Enum):
    FINANCIAL_PLANNING = "Financial Planning"
    RETIREMENT_PLANNING = "Retirement Planning"
    INVESTMENT_MANAGEMENT = "Investment Management"
    ESTATE_PLANNING = "Estate Planning"
    TAX_PLANNING = "Tax Planning"
    INSURANCE_PLANNING = "Insurance Planning"
    EDUCATION_PLANNING = "Education Planning"
    BUSINESS_PLANNING = "Business Planning"


class ClienteleType(str, enum.Enum):
    INDIVIDUALS = "Individuals"
    HIGH_NET_WORTH = "High Net Worth Individuals"
    BUSINESS_OWNERS = "Business Owners"
    RETIREES = "Retirees"
    FAMILIES = "Families"
    YOUNG_PROFESSIONALS = "Young Professionals"
    MEDICAL_PROFESSIONALS = "Medical Professionals"
    TECH_PROFESSIONALS = "Tech Professionals"


class CompensationType(str, enum.Enum):
    FEE_ONLY = "Fee-Only"
    FEE_BASED = "Fee-Based"
    COMMISSION = "Commission"
    HOURLY = "Hourly"
    FLAT_FEE = "Flat Fee"
    AUM = "Assets Under Management"


class Designation(str, enum.Enum):
    AEP = "Accredited Estate Planner (AEP)"
    AIF = "Accredited Investment Fiduciary (AIF)"
    APMA = "Accredited Portfolio Manager Advisor (APMA)"
    CDFA = "Certified Divorce Financial Analyst (CDFA)"
    CEPA = "Certified Exit Planning Advisor (CEPA)"
    CFP = "Certified Financial Planner (CFP)"
    CKA = "Certified Kingdom Advisor (CKA)"
    CPA = "Certified Public Accountant (CPA)"
    CSPG = "Certified Specialist in Planned Giving (CSPG)"
    CVGA = "Certified Value Growth Advisor (CVGA)"
    CHFC = "Chartered Financial Consultant (ChFC)"
    CFA = "Chartered Financial Analyst (CFA)"
    CHSNC = "Chartered Special Needs Consultant (ChSNC)"
    CRPC = "Chartered Retirement Planning Counselor™ (CRPC®)"
    EA = "Enrolled Agent (EA)"
    LUTCF = "Life Underwriting Training Council Fellow (LUTCF)"
    RFC = "Registered Financial Consultant (RFC)"
    RIA = "Registered Investment Advisor (RIA)"
    RMA = "Retirement Management Advisor (RMA®)"
    RICP = "Retirement Income Certified Professional (RICP)"


class License(str, enum.Enum):
    ANNUITIES = "Annuities"
    HEALTH_DISABILITY = "Health/Disability Insurance"
    HOME_AUTO = "Home & Auto"
    INSURANCE = "Insurance"
    LIFE_ACCIDENT_HEALTH = "Life/Accident/Health"
    LIFE_HEALTH = "Life & Health"
    LIFE_DISABILITY = "Life & Disability"
    LIFE_INSURANCE = "Life Insurance"
    LONG_TERM_CARE = "Long Term Care"
    SERIES_3 = "Series 3"
    SERIES_6 = "Series 6"
    SERIES_7 = "Series 7"
    SERIES_24 = "Series 24"
    SERIES_26 = "Series 26"
    SERIES_31 = "Series 31"
    SERIES_63 = "Series 63"
    SERIES_65 = "Series 65"
    SERIES_66 = "Series 66"
    SERIES_79 = "Series 79"
    SERIES_99 = "Series 99"
    SIE = "SIE"


class USState(str, enum.Enum):
    AL = "Alabama"
    AK = "Alaska"
    AZ = "Arizona"
    AR = "Arkansas"
    CA = "California"
    CO = "Colorado"
    CT = "Connecticut"
    DE = "Delaware"
    DC = "District of Columbia"
    FL = "Florida"
    GA = "Georgia"
    HI = "Hawaii"
    ID = "Idaho"
    IL = "Illinois"
    IN = "Indiana"
    IA = "Iowa"
    KS = "Kansas"
    KY = "Kentucky"
    LA = "Louisiana"
    ME = "Maine"
    MD = "Maryland"
    MA = "Massachusetts"
    MI = "Michigan"
    MN = "Minnesota"
    MS = "Mississippi"
    MO = "Missouri"
    MT = "Montana"
    NE = "Nebraska"
    NV = "Nevada"
    NH = "New Hampshire"
    NJ = "New Jersey"
    NM = "New Mexico"
    NY = "New York"
    NC = "North Carolina"
    ND = "North Dakota"
    OH = "Ohio"
    OK = "Oklahoma"
    OR = "Oregon"
    PA = "Pennsylvania"
    RI = "Rhode Island"
    SC = "South Carolina"
    SD = "South Dakota"
    TN = "Tennessee"
    TX = "Texas"
    UT = "Utah"
    VT = "Vermont"
    VA = "Virginia"
    WA = "Washington"
    WV = "West Virginia"
    WI = "Wisconsin"
    WY = "Wyoming"


class AssetClass(str, enum.Enum):
    ART = "Art"
    ASSET_MANAGEMENT = "Asset Management"
    COLLECTIBLES = "Collectibles"
    COMMODITIES = "Commodities"
    CRYPTOCURRENCY = "Cryptocurrency"
    LOANS = "Loans"
    REAL_ESTATE = "Real Estate"
    ROBO_ADVISOR = "Robo-Advisor"
    SAVINGS = "Savings"
    STARTUPS = "Startups"
    TRADING = "Trading"


class PayoutFrequency(str, enum.Enum):
    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"
    SEMI_ANNUALLY = "Semi-Annually"
    ANNUALLY = "Annually"
    ASSET_SOLD = "Asset Sold"


class WithdrawalType(str, enum.Enum):
    ANYTIME = "Anytime"
    LIMITED = "Limited"
    LOCKED_PERIOD = "Locked Period"
    SCHEDULED = "Scheduled"


class AccountingService(str, enum.Enum):
    ADVISORY = "Advisory Services"
    BOOKKEEPING = "Bookkeeping"
    BUSINESS_FORMATION = "Business Formation"
    FORENSIC = "Forensic Accounting"
    FRACTIONAL_CFO = "Fractional CFO Services"
    INTERNATIONAL_TAX = "International Tax Services"
    MERGERS_ACQUISITIONS = "Mergers and Acquisitions"
    PAYROLL = "Payroll Services"
    SALES_TAX = "Sales Tax"
    TAX_PREPARATION = "Tax Preparation"


class ClientSpecialty(str, enum.Enum):
    HIGH_NET_WORTH = "High Net Worth Individuals"
    REAL_ESTATE_INVESTORS = "Real Estate Investors"
    VC_BACKED = "VC Backed"
    ULTRA_HIGH_NET_WORTH = "Ultra High Net Worth Individuals"
    DIGITAL_NOMADS = "Digital Nomads"
    EQUITY_COMPENSATION = "Equity Compensation (RSUs, Stock Options)"
    QSBS_HOLDERS = "QSBS Holders"
    HENRY = "HENRY (High Earners Not Rich Yet)"
    K1_PARTNERSHIP = "K1 Partnership Income"
    INTERNATIONAL_EXPATS = "International/Expats"
    ECOMMERCE = "E-commerce Businesses"
    CRYPTO_INVESTORS = "Crypto Investors"
    SOLOPRENEURS = "Solopreneurs"
    SMB_OWNER = "SMB Owner"


class BlogCategoryName(str, enum.Enum):
    BANKING = "Banking"
    BUSINESS = "Business"
    LOANS = "Loans"
    INVESTING = "Investing"
    INSURANCE = "Insurance"
    INTERVIEW = "Interview"
    FINANCE = "Finance"
    TAXES = "Taxes"
    REAL_ESTATE = "Real Estate"
    RETIREMENT = "Retirement"
    REVIEWS = "Reviews"


class DiscussionTopic(str, enum.Enum):
    FINANCIAL_PLANNING = "Financial Planning"
    RETIREMENT_PLANNING = "Retirement Planning"
    INVESTMENT_MANAGEMENT = "Investment Management"
    TAX_PLANNING = "Tax Planning"
    ESTATE_PLANNING = "Estate Planning"
    INSURANCE_PLANNING = "Insurance Planning"
    EDUCATION_PLANNING = "Education Planning"
    BUSINESS_PLANNING = "Business Planning"
    DEBT_MANAGEMENT = "Debt Management"
    OTHER = "Other"


class ProfessionalType(str, enum.Enum):
    FINANCIAL_ADVISOR = "Financial Advisor"
    WEALTH_MANAGER = "Wealth Manager"
    INVESTMENT_ADVISOR = "Investment Advisor"
    FINANCIAL_PLANNER = "Financial Planner"
    TAX_PROFESSIONAL = "Tax Professional"
    RETIREMENT_SPECIALIST = "Retirement Specialist"
    INSURANCE_AGENT = "Insurance Agent"
