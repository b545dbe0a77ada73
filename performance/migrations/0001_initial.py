import base.validators
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("hr", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ScoreRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("record_date", models.DateField(
                    default=django.utils.timezone.localdate, validators=[base.validators.validate_not_future],
                )),
                ("behavior_type", models.CharField(
                    choices=[
                        ("late", "迟到"),
                        ("early_leave", "早退"),
                        ("absent", "旷工"),
                        ("phone_usage", "上班看手机"),
                        ("work_slack", "工作懈怠"),
                        ("rule_violation_minor", "违反规定(轻微)"),
                        ("rule_violation_serious", "违反规定(严重)"),
                        ("interview_record", "约谈记录"),
                        ("weekend_help", "周末加班帮忙"),
                        ("cleaning", "主动打扫卫生"),
                        ("moving_help", "协助搬运物品"),
                        ("group_activity", "积极参与集体活动"),
                        ("group_task", "协助完成集体任务"),
                        ("suggestion", "提出合理化建议"),
                        ("help_newcomer", "帮助新员工"),
                        ("outstanding_work", "工作表现突出"),
                    ],
                    db_index=True,
                    max_length=32,
                )),
                ("score_change", models.IntegerField(editable=False)),
                ("reason", models.CharField(
                    max_length=500, validators=[django.core.validators.MinLengthValidator(2, "记录原因至少2个字符")],
                )),
                ("recorded_by", models.CharField(default="管理员", max_length=64)),
                ("evidence", models.CharField(
                    blank=True, default="", max_length=500, validators=[base.validators.validate_image_url],
                )),
                ("employee", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="score_records",
                    to="hr.employee",
                )),
            ],
            options={
                "db_table": "performance_score_record",
                "ordering": ["-record_date", "-id"],
                "indexes": [
                    models.Index(fields=["employee", "-record_date"], name="perf_score_emp_date_idx"),
                    models.Index(fields=["record_date"], name="perf_score_date_idx"),
                ],
            },
        ),
    ]
