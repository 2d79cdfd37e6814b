"""CDK Stack for RDS Tag Setter Lambda."""

import json

from aws_cdk import (
    Stack,
    Duration,
    aws_lambda as lambda_,
    aws_iam as iam,
    aws_events as events,
    aws_events_targets as targets,
    aws_logs as logs,
    aws_cloudwatch as cloudwatch,
    CfnParameter,
    CfnOutput,
    Tags
)
from constructs import Construct


class RDSTagSetterStack(Stack):
    """
    CDK Stack that tags Aurora autoscaled read replicas.

    One stack per Aurora cluster:
    - EventBridge rule on RDS "DB instance created" events
    - Lambda that checks cluster membership and applies the configured tags
    - Errors alarm for failed invocations
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        git_commit: str = "none",
        build_time: str = "unknown",
        **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # Parameters
        cluster_param = CfnParameter(
            self, "ClusterIdentifier",
            type="String",
            min_length=1,
            description="[TARGET] Aurora cluster identifier whose autoscaled read replicas get tagged. Replicas of other clusters are skipped."
        )

        tags_param = CfnParameter(
            self, "TagsJson",
            type="String",
            default=json.dumps({"iit-billing-tag": "aurora-autoscaling"}),
            description="[TAGS] JSON object of tag keys to string values applied to each replica, e.g. {\"Owner\": \"platform\"}. Invalid JSON fails every invocation."
        )

        powertools_layer_param = CfnParameter(
            self, "PowertoolsLayerArn",
            type="String",
            default=f"arn:aws:lambda:{self.region}:017000801446:layer:AWSLambdaPowertoolsPythonV3-python313-arm64:7",
            description="[RUNTIME] ARN of the AWS Lambda Powertools for Python layer (python3.13, arm64)."
        )

        log_retention_param = CfnParameter(
            self, "LogRetentionDays",
            type="Number",
            default=30,
            description="[LOGGING] CloudWatch log retention period in days. Valid options: 1, 3, 7, 14, 30, 60, 90, 120, 180."
        )

        log_level_param = CfnParameter(
            self, "LogLevel",
            type="String",
            default="INFO",
            allowed_values=["DEBUG", "INFO", "WARNING", "ERROR"],
            description="[LOGGING] Log verbosity. DEBUG adds per-call details, INFO logs every decision (received, skipped, tagged)."
        )

        # IAM Role for Lambda
        lambda_role = iam.Role(
            self, "RDSTagSetterRole",
            assumed_by=iam.ServicePrincipal("lambda.amazonaws.com"),
            managed_policies=[
                iam.ManagedPolicy.from_aws_managed_policy_name(
                    "service-role/AWSLambdaBasicExecutionRole"
                ),
                iam.ManagedPolicy.from_aws_managed_policy_name(
                    "AWSXRayDaemonWriteAccess"
                )
            ]
        )

        lambda_role.add_to_policy(iam.PolicyStatement(
            effect=iam.Effect.ALLOW,
            actions=[
                "rds:DescribeDBInstances",
                "rds:AddTagsToResource",
                "sts:GetCallerIdentity"
            ],
            resources=["*"]
        ))

        # Map log retention parameter to CDK enum
        log_retention_mapping = {
            1: logs.RetentionDays.ONE_DAY,
            3: logs.RetentionDays.THREE_DAYS,
            7: logs.RetentionDays.ONE_WEEK,
            14: logs.RetentionDays.TWO_WEEKS,
            30: logs.RetentionDays.ONE_MONTH,
            60: logs.RetentionDays.TWO_MONTHS,
            90: logs.RetentionDays.THREE_MONTHS,
            120: logs.RetentionDays.FOUR_MONTHS,
            180: logs.RetentionDays.SIX_MONTHS,
        }

        # Lambda Function
        tag_setter_lambda = lambda_.Function(
            self, "RDSTagSetterLambda",
            description="Applies tags to Aurora read replicas created by application autoscaling",
            runtime=lambda_.Runtime.PYTHON_3_13,
            architecture=lambda_.Architecture.ARM_64,
            handler="rds_tag_setter.handler.lambda_handler",
            code=lambda_.Code.from_asset("lambda"),
            layers=[
                lambda_.LayerVersion.from_layer_version_arn(
                    self, "PowertoolsLayer", powertools_layer_param.value_as_string
                )
            ],
            role=lambda_role,
            timeout=Duration.seconds(30),
            memory_size=256,
            tracing=lambda_.Tracing.ACTIVE,
            log_retention=log_retention_mapping.get(
                log_retention_param.value_as_number,
                logs.RetentionDays.ONE_MONTH
            ),
            environment={
                "RDS_CLUSTER_IDENTIFIER": cluster_param.value_as_string,
                "TAGS": tags_param.value_as_string,
                "LOG_LEVEL": log_level_param.value_as_string,
                "GIT_COMMIT": git_commit,
                "BUILD_TIME": build_time,
                "POWERTOOLS_SERVICE_NAME": "rds-tag-setter"
            }
        )

        Tags.of(tag_setter_lambda).add("iit-billing-tag", "rds-tag-setter")

        # EventBridge Rule: RDS-EVENT-0005 is "DB instance created"
        instance_created_rule = events.Rule(
            self, "InstanceCreatedRule",
            description="Invokes the tag setter when an RDS DB instance is created",
            event_pattern=events.EventPattern(
                source=["aws.rds"],
                detail_type=["RDS DB Instance Event"],
                detail={"EventID": ["RDS-EVENT-0005"]}
            ),
            enabled=True
        )

        # Failed invocations are retried by EventBridge; tagging is idempotent
        instance_created_rule.add_target(targets.LambdaFunction(
            tag_setter_lambda,
            retry_attempts=2,
            max_event_age=Duration.hours(1)
        ))

        cloudwatch.Alarm(
            self, "LambdaErrorsAlarm",
            alarm_description="Alert when the RDS tag setter fails to tag a replica",
            metric=tag_setter_lambda.metric_errors(
                period=Duration.minutes(5),
                statistic="Sum"
            ),
            threshold=1,
            evaluation_periods=1,
            treat_missing_data=cloudwatch.TreatMissingData.NOT_BREACHING
        )

        # Outputs
        CfnOutput(
            self, "LambdaFunctionName",
            description="Name of the Lambda function",
            value=tag_setter_lambda.function_name
        )

        CfnOutput(
            self, "LambdaFunctionArn",
            description="ARN of the Lambda function",
            value=tag_setter_lambda.function_arn
        )

        CfnOutput(
            self, "EventRuleArn",
            description="ARN of the EventBridge rule that triggers the function",
            value=instance_created_rule.rule_arn
        )
