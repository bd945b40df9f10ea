"""
Static scoring tables.

Lookups that fall back through several rules are stored as ordered tuples so
the first matching rule is always the same one. Exact-match tables are
read-only mappings.
"""

from types import MappingProxyType

from core.scoring.models import OperatingStatus


# ---------------------------------------------------------------------------
# Distance
# ---------------------------------------------------------------------------

EARTH_RADIUS_METERS = 6_371_000
MAX_SCORED_DISTANCE_METERS = 10_000
WALKING_METERS_PER_MINUTE = 80

ROAD_CORRECTION_FACTORS = MappingProxyType({
    'DENSE_URBAN': 1.4,
    'SUBURBAN': 1.2,
    'DEFAULT': 1.3,
})


# ---------------------------------------------------------------------------
# Operating status
# ---------------------------------------------------------------------------

DEFAULT_CLOSING_SOON_MINUTES = 60
NEXT_OPEN_SEARCH_DAYS = 14
UPCOMING_HOLIDAY_LIMIT = 5
MINUTES_PER_DAY = 24 * 60

STATUS_SCORES = MappingProxyType({
    OperatingStatus.OPEN: 100,
    OperatingStatus.CLOSING_SOON: 80,
    OperatingStatus.CLOSED: 60,
    OperatingStatus.NO_INFO: 50,
    OperatingStatus.HOLIDAY: 0,
    OperatingStatus.TEMP_CLOSED: 0,
})

STATUS_COLORS = MappingProxyType({
    OperatingStatus.OPEN: 'green',
    OperatingStatus.CLOSING_SOON: 'yellow',
    OperatingStatus.CLOSED: 'gray',
    OperatingStatus.NO_INFO: 'gray',
    OperatingStatus.HOLIDAY: 'red',
    OperatingStatus.TEMP_CLOSED: 'red',
})

# Index 0 is unused so that DAY_NAMES[day_of_week] works with Monday = 1
DAY_NAMES = ('', 'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')


# ---------------------------------------------------------------------------
# Staff specialty
# ---------------------------------------------------------------------------

DEFAULT_CERTIFICATION_SCORE = 20

# Labels as they appear in the public center registry, with and without the
# space before the level, plus English equivalents.
CERTIFICATION_SCORES = MappingProxyType({
    # Psychiatrists
    '정신건강의학과 전문의': 100,
    '정신건강의학과전문의': 100,
    '정신과 전문의': 100,
    '정신과전문의': 100,
    'psychiatrist': 100,

    # Mental health professionals
    '정신건강전문요원 1급': 80,
    '정신건강전문요원1급': 80,
    '정신건강전문요원 2급': 70,
    '정신건강전문요원2급': 70,
    '정신건강전문요원': 65,
    'mental health professional level 1': 80,
    'mental health professional level 2': 70,
    'mental health professional': 65,

    # Clinical psychologists
    '임상심리사 1급': 60,
    '임상심리사1급': 60,
    '임상심리사 2급': 50,
    '임상심리사2급': 50,
    '임상심리사': 50,
    '임상심리전문가': 60,
    'clinical psychologist level 1': 60,
    'clinical psychologist level 2': 50,
    'clinical psychologist': 50,
    'clinical psychology specialist': 60,

    # Psychiatric nurses
    '정신보건간호사': 55,
    '정신건강간호사': 55,
    'psychiatric nurse': 55,

    # Counseling psychologists
    '상담심리사 1급': 50,
    '상담심리사1급': 50,
    '상담심리사 2급': 40,
    '상담심리사2급': 40,
    '상담심리사': 40,
    'counseling psychologist level 1': 50,
    'counseling psychologist level 2': 40,
    'counseling psychologist': 40,

    # Social workers and allied counselors
    '사회복지사 1급': 40,
    '사회복지사1급': 40,
    '사회복지사 2급': 35,
    '사회복지사2급': 35,
    'social worker level 1': 40,
    'social worker level 2': 35,
    '청소년상담사': 35,
    '전문상담사': 35,
    'youth counselor': 35,
    'professional counselor': 35,
})

# Checked in order against labels with no exact match. Roles that are often
# prefixed with "psychiatric" must precede the psychiatrist keyword.
CERTIFICATION_KEYWORDS = (
    ('정신건강의학과', 100),
    ('정신과전문의', 100),
    ('psychiatric nurse', 55),
    ('social worker', 37),
    ('counselor', 35),
    ('psychiatrist', 100),
    ('정신건강전문요원', 75),
    ('mental health professional', 75),
    ('임상심리사', 55),
    ('임상심리전문가', 60),
    ('clinical psycholog', 55),
    ('상담심리사', 45),
    ('counseling psycholog', 45),
    ('정신보건간호사', 55),
    ('정신건강간호사', 55),
    ('사회복지사', 37),
    ('청소년상담사', 35),
    ('전문상담사', 35),
)

# (minimum score, grade), highest first
CERTIFICATION_GRADES = (
    (90, 'S'),
    (70, 'A'),
    (50, 'B'),
    (30, 'C'),
)


# ---------------------------------------------------------------------------
# Programs
# ---------------------------------------------------------------------------

PROGRAM_CRITERION_WEIGHTS = MappingProxyType({
    'category': 100,
    'age': 50,
    'symptom': 30,
    'online': 20,
    'free': 15,
})

CATEGORY_EXACT_SCORE = 100
CATEGORY_PARTIAL_SCORE = 80
CATEGORY_SYNONYM_SCORE = 60
AGE_EXACT_SCORE = 100
AGE_ADULT_SCORE = 80
AGE_PARTIAL_SCORE = 60
ONLINE_MISMATCH_SCORE = 50

CATEGORY_SYNONYMS = MappingProxyType({
    '개인상담': ('심리상담', '정신상담', '1:1상담'),
    '집단상담': ('그룹상담', '집단치료', '그룹치료'),
    '심리검사': ('심리평가', '심리측정', '진단검사'),
    '정신건강교육': ('예방교육', '정신건강강좌', '교육프로그램'),
    '인지행동치료': ('CBT', '인지치료', '행동치료'),
    '미술치료': ('예술치료', '미술심리치료'),
    '음악치료': ('예술치료', '음악심리치료'),
    'individual counseling': ('psychological counseling', 'one-on-one counseling', '1:1 counseling'),
    'group counseling': ('group therapy', 'support group'),
    'psychological testing': ('psychological assessment', 'diagnostic testing'),
    'cognitive behavioral therapy': ('CBT', 'cognitive therapy', 'behavioral therapy'),
})

SYMPTOM_KEYWORDS = MappingProxyType({
    '우울감': ('우울', '우울증', 'depression', '기분저하'),
    '불안': ('불안', '불안장애', 'anxiety', '걱정'),
    '스트레스': ('스트레스', 'stress', '긴장', '압박'),
    '불면증': ('불면', '수면', 'sleep', '잠'),
    '공황장애': ('공황', 'panic', '공포'),
    '강박증': ('강박', 'OCD', '반복행동'),
    '외상후스트레스': ('PTSD', '트라우마', 'trauma', '외상'),
    '대인관계': ('대인관계', '관계', '사회성', '소통'),
    '가족갈등': ('가족', '부부', '부모자녀', '가정'),
    '직장스트레스': ('직장', '직무', '업무', '번아웃'),
    '학업스트레스': ('학업', '학교', '공부', '시험'),
    '중독': ('중독', 'addiction', '의존'),
    '자살사고': ('자살', '자해', '위기개입'),
})

ADULT_TARGET_LABELS = ('성인', 'adult')
ADULT_AGE_GROUPS = frozenset({'20대', '30대', '40대', '50대', '20s', '30s', '40s', '50s'})

# (minimum active programs, score), highest first
PROGRAM_DIVERSITY_SCORES = (
    (5, 80),
    (3, 60),
    (1, 40),
)

MAX_MATCHED_PROGRAMS = 3


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

MODULE_NAMES = ('distance', 'operating', 'specialty', 'program')
DEFAULT_MODULE_SCORE = 50

# (minimum total, grade), highest first
SCORE_GRADES = (
    (90, 'S'),
    (80, 'A'),
    (70, 'B'),
    (60, 'C'),
)
