import base.validators
import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="RecruitmentRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("interview_date", models.DateField(db_index=True, validators=[base.validators.validate_not_future])),
                ("candidate_name", models.CharField(db_index=True, max_length=20, validators=[base.validators.validate_chinese_name])),
                ("channel", models.CharField(blank=True, default="", max_length=64)),
                ("gender", models.CharField(choices=[("male", "男"), ("female", "女")], max_length=8)),
                ("age", models.PositiveSmallIntegerField(
                    blank=True,
                    null=True,
                    validators=[
                        django.core.validators.MinValueValidator(16, "年龄不能小于16岁"),
                        django.core.validators.MaxValueValidator(70, "年龄不能大于70岁"),
                    ],
                )),
                ("id_card", models.CharField(
                    blank=True, db_index=True, default="", max_length=18, validators=[base.validators.validate_id_card],
                )),
                ("phone", models.CharField(db_index=True, max_length=11, validators=[base.validators.validate_phone])),
                ("applied_position", models.CharField(
                    choices=[
                        ("销售主管", "销售主管"), ("人事主管", "人事主管"), ("运营主管", "运营主管"),
                        ("销售", "销售"), ("运营", "运营"), ("助理", "助理"), ("客服", "客服"),
                        ("美工", "美工"), ("未分配", "未分配"),
                    ],
                    db_index=True,
                    default="未分配",
                    max_length=16,
                )),
                ("has_trial", models.BooleanField(default=False)),
                ("trial_date", models.DateField(blank=True, null=True)),
                ("trial_days", models.PositiveSmallIntegerField(
                    blank=True,
                    null=True,
                    validators=[
                        django.core.validators.MinValueValidator(1, "试岗天数至少1天"),
                        django.core.validators.MaxValueValidator(90, "试岗天数最多90天"),
                    ],
                )),
                ("trial_status", models.CharField(
                    blank=True,
                    choices=[("excellent", "优秀"), ("good", "良好"), ("average", "一般"), ("poor", "差")],
                    default="",
                    max_length=16,
                )),
                ("remark", models.CharField(blank=True, default="", max_length=500)),
                ("status", models.CharField(
                    choices=[("interviewing", "面试中"), ("trial", "试岗中"), ("hired", "已录用"), ("rejected", "已拒绝")],
                    db_index=True,
                    default="interviewing",
                    max_length=16,
                )),
            ],
            options={
                "db_table": "recruitment_record",
                "ordering": ["-interview_date", "-id"],
            },
        ),
    ]
