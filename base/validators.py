# base/validators.py
"""
Field validators shared by Employee and RecruitmentRecord.
"""
import re

from django.core.exceptions import ValidationError
from django.core.validators import RegexValidator
from django.utils import timezone

PHONE_REGEX = r"^1[3-9]\d{9}$"
ID_CARD_REGEX = r"^[1-9]\d{5}(18|19|20)\d{2}((0[1-9])|(1[0-2]))(([0-2][1-9])|10|20|30|31)\d{3}[0-9Xx]$"
CHINESE_NAME_REGEX = r"^[一-龥]{2,20}$"
IMAGE_URL_REGEX = r"^https?://.+\.(jpg|jpeg|png|gif|webp)$"

validate_phone = RegexValidator(PHONE_REGEX, "请输入有效的手机号码")
validate_id_card = RegexValidator(ID_CARD_REGEX, "请输入有效的身份证号")
validate_chinese_name = RegexValidator(CHINESE_NAME_REGEX, "请输入有效的中文姓名")
validate_image_url = RegexValidator(IMAGE_URL_REGEX, "证据附件必须是有效的图片URL", flags=re.IGNORECASE)


def validate_not_future(value):
    """Dates describing something that already happened cannot lie in the future."""
    today = timezone.localdate()
    day = value.date() if hasattr(value, "date") and callable(value.date) else value
    if day > today:
        raise ValidationError("日期不能晚于当前日期")
