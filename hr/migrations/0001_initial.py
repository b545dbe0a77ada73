import base.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Employee",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("employee_id", models.CharField(blank=True, max_length=32, unique=True)),
                ("name", models.CharField(db_index=True, max_length=20, validators=[base.validators.validate_chinese_name])),
                ("gender", models.CharField(choices=[("male", "男"), ("female", "女")], max_length=8)),
                ("phone", models.CharField(
                    error_messages={"unique": "该手机号已存在"},
                    max_length=11,
                    unique=True,
                    validators=[base.validators.validate_phone],
                )),
                ("id_card", models.CharField(
                    error_messages={"unique": "该身份证号已存在"},
                    max_length=18,
                    unique=True,
                    validators=[base.validators.validate_id_card],
                )),
                ("regular_date", models.DateField(validators=[base.validators.validate_not_future])),
                ("hire_date", models.DateField(blank=True, null=True)),
                ("working_days", models.PositiveIntegerField(default=0)),
                ("work_status", models.CharField(
                    choices=[("active", "在职"), ("resigned", "离职"), ("leave", "请假")],
                    db_index=True,
                    default="active",
                    max_length=16,
                )),
                ("department", models.CharField(
                    choices=[("销售部", "销售部"), ("运营部", "运营部"), ("人事部", "人事部"), ("未分配", "未分配")],
                    db_index=True,
                    default="未分配",
                    max_length=16,
                )),
                ("position", models.CharField(
                    choices=[
                        ("销售主管", "销售主管"), ("人事主管", "人事主管"), ("运营主管", "运营主管"),
                        ("销售", "销售"), ("运营", "运营"), ("助理", "助理"), ("客服", "客服"),
                        ("美工", "美工"), ("未分配", "未分配"),
                    ],
                    default="未分配",
                    max_length=16,
                )),
                ("total_score", models.IntegerField(db_index=True, default=0)),
            ],
            options={
                "db_table": "hr_employee",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["work_status", "department"], name="hr_emp_status_dept_idx")],
            },
        ),
    ]
