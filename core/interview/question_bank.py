"""
Static question bank.

Maps a (sanitized) topic to a category via Thai keyword matching and holds
the canned questions used when the language model is unavailable:

- FIRST_QUESTION_MAP: opening questions per category. They are short,
  behaviour-focused, never mention a brand and end with "ครับ".
- DEFAULT_QUESTION_BANK: follow-up templates used for later turns when the
  interview config defines no example_questions.
"""

from typing import Any, Dict, List, Optional

from .sanitizer import sanitize_topic
from .template import fill_template

GENERIC_CATEGORY = "generic"

# Checked in order; the first category with a matching keyword wins.
CATEGORY_KEYWORDS = [
    ("dishwashing", ["น้ำยาล้างจาน", "ล้างจาน"]),
    ("freshfood", ["อาหารสด", "ของสด"]),
    ("skincare", ["ครีม", "สกินแคร์", "บำรุงผิว"]),
    ("shampoo", ["แชมพู", "สระผม"]),
    ("appliance", ["เครื่องใช้ไฟฟ้า", "ทีวี", "ตู้เย็น", "แอร์"]),
    ("delivery", ["เดลิเวอรี่", "ส่งของ", "ส่งอาหาร"]),
]

FIRST_QUESTION_MAP: Dict[str, List[str]] = {
    "dishwashing": [
        "หลังมื้ออาหารปกติคุณจัดการเรื่องล้างจานยังไงบ้างครับ?",
        "ในแต่ละวันคุณต้องล้างจานบ่อยแค่ไหนครับ?",
    ],
    "freshfood": [
        "ปกติคุณซื้อของสดมาทำอาหารบ่อยแค่ไหนครับ?",
        "เวลาจะทำอาหารเองที่บ้าน คุณมักซื้อของสดจากที่ไหนครับ?",
    ],
    "skincare": [
        "ในชีวิตประจำวันคุณทาครีมบำรุงผิวบ่อยแค่ไหนครับ?",
        "ปกติคุณดูแลผิวหน้าของตัวเองยังไงบ้างในแต่ละวันครับ?",
    ],
    "shampoo": [
        "ปกติคุณสระผมบ่อยแค่ไหนครับในหนึ่งสัปดาห์?",
        "เวลาคุณเลือกแชมพูใช้เอง คุณนึกถึงเรื่องอะไรเป็นอย่างแรกครับ?",
    ],
    "appliance": [
        "ในชีวิตประจำวัน เครื่องใช้ไฟฟ้าที่คุณใช้บ่อยที่สุดคืออะไรครับ?",
        "ปกติคุณใช้เครื่องใช้ไฟฟ้าพวกทีวี ตู้เย็น หรือแอร์บ่อยแค่ไหนครับ?",
    ],
    "delivery": [
        "ช่วงนี้คุณใช้บริการส่งของหรือเดลิเวอรี่บ่อยแค่ไหนครับ?",
        "ปกติคุณใช้บริการส่งอาหารหรือส่งของในโอกาสแบบไหนบ้างครับ?",
    ],
    GENERIC_CATEGORY: [
        "ปกติคุณใช้{topic}บ่อยแค่ไหนครับ?",
        "ในชีวิตประจำวัน {topic} เข้ามาเกี่ยวข้องกับคุณในช่วงเวลาไหนบ้างครับ?",
        "โดยรวมแล้วตอนนี้คุณรู้สึกยังไงกับ {topic} ครับ?",
    ],
}

DEFAULT_QUESTION_BANK = [
    {"type": "Functional", "text": "คุณใช้ {topic} อย่างไรและทำไมถึงเลือกใช้ {topic}?"},
    {"type": "Emotional", "text": "คุณรู้สึกอย่างไรเมื่อใช้ {topic}?"},
    {"type": "Barrier", "text": "มีอะไรที่ทำให้คุณไม่พอใจหรือไม่สะดวกเกี่ยวกับ {topic}?"},
    {"type": "Trigger", "text": "อะไรที่ทำให้คุณตัดสินใจซื้อหรือใช้ {topic}?"},
    {"type": "Brand Image", "text": "ถ้าคุณต้องแนะนำ {topic} ให้เพื่อน 3 คน คุณจะบอกอะไร?"},
]


def detect_topic_category(topic: Optional[str]) -> str:
    """Return the category tag for a topic, or "generic" when nothing matches."""
    lowered = (topic or "").lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return GENERIC_CATEGORY


def get_first_questions(category: str) -> List[str]:
    """Candidate opening-question templates for a category (copy)."""
    return list(FIRST_QUESTION_MAP.get(category) or FIRST_QUESTION_MAP[GENERIC_CATEGORY])


def render_first_questions(topic: Optional[str]) -> List[str]:
    """Opening questions for a raw topic, with {topic} filled by its sanitized form."""
    clean_topic = sanitize_topic(topic)
    category = detect_topic_category(clean_topic)
    return [fill_template(q, {"topic": clean_topic}) for q in get_first_questions(category)]


def question_templates(example_questions: Optional[Dict[str, Any]], topic: str) -> List[str]:
    """Follow-up question pool for turns after the first.

    Prefers the "general" list of the configured example questions, then every
    configured list flattened, then DEFAULT_QUESTION_BANK.
    """
    variables = {"topic": topic, "product": topic}
    example_questions = example_questions or {}

    general = [q for q in example_questions.get("general") or [] if isinstance(q, str) and q.strip()]
    if general:
        return [fill_template(q, variables) for q in general]

    flattened: List[str] = []
    for questions in example_questions.values():
        if isinstance(questions, list):
            flattened.extend(q for q in questions if isinstance(q, str) and q.strip())
    if flattened:
        return [fill_template(q, variables) for q in flattened]

    return [fill_template(item["text"], variables) for item in DEFAULT_QUESTION_BANK]
