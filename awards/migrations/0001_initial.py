import awards.models
import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("hr", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="AwardCycle",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("year", models.PositiveSmallIntegerField(unique=True)),
                ("generated_at", models.DateTimeField(blank=True, null=True)),
                ("generation_count", models.PositiveIntegerField(default=0)),
                ("ranking_score", models.CharField(blank=True, default="", max_length=16)),
            ],
            options={
                "db_table": "awards_cycle",
                "ordering": ["-year"],
            },
        ),
        migrations.CreateModel(
            name="AnnualAward",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("year", models.PositiveSmallIntegerField(db_index=True, validators=[awards.models.validate_award_year])),
                ("final_score", models.IntegerField(
                    validators=[django.core.validators.MinValueValidator(0, "最终得分不能为负数")],
                )),
                ("rank", models.PositiveIntegerField(
                    validators=[django.core.validators.MinValueValidator(1, "排名不能小于1")],
                )),
                ("award_level", models.CharField(
                    choices=[("special", "特等奖"), ("first", "一等奖"), ("second", "二等奖"), ("excellent", "优秀员工")],
                    db_index=True,
                    max_length=16,
                )),
                ("bonus_amount", models.PositiveIntegerField(
                    validators=[django.core.validators.MinValueValidator(0, "奖金金额不能为负数")],
                )),
                ("employee", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="annual_awards",
                    to="hr.employee",
                )),
            ],
            options={
                "db_table": "awards_annual_award",
                "ordering": ["-year", "rank"],
                "indexes": [models.Index(fields=["year", "rank"], name="awards_year_rank_idx")],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("year", "employee"),
                        name="awards_unique_year_employee",
                        violation_error_message="该员工在该年度已有评优记录",
                    ),
                ],
            },
        ),
    ]
