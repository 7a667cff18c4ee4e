"""Tests for the ECS tools."""
import pytest


@pytest.mark.asyncio
async def test_list_clusters(dispatcher, clients):
    clients["ecs"].list_clusters.return_value = {
        "clusterArns": ["arn:aws:ecs:us-east-1:123:cluster/prod"]
    }

    result = await dispatcher.invoke("ecs_list_clusters", {})

    assert result.payload == {
        "count": 1,
        "clusters": [{"arn": "arn:aws:ecs:us-east-1:123:cluster/prod", "name": "prod"}],
    }


@pytest.mark.asyncio
async def test_list_services_empty_skips_describe(dispatcher, clients):
    clients["ecs"].list_services.return_value = {"serviceArns": []}

    result = await dispatcher.invoke("ecs_list_services", {"cluster": "prod"})

    clients["ecs"].list_services.assert_called_once_with(cluster="prod", maxResults=50)
    clients["ecs"].describe_services.assert_not_called()
    assert result.payload == {"cluster": "prod", "count": 0, "services": []}


@pytest.mark.asyncio
async def test_list_services_describes_arns(dispatcher, clients):
    arn = "arn:aws:ecs:us-east-1:123:service/prod/api"
    clients["ecs"].list_services.return_value = {"serviceArns": [arn]}
    clients["ecs"].describe_services.return_value = {
        "services": [
            {
                "serviceName": "api",
                "status": "ACTIVE",
                "desiredCount": 2,
                "runningCount": 2,
                "pendingCount": 0,
                "launchType": "FARGATE",
                "taskDefinition": "arn:aws:ecs:us-east-1:123:task-definition/api:7",
                "events": [{"message": "steady state"}],
            }
        ]
    }

    result = await dispatcher.invoke("ecs_list_services", {"cluster": "prod", "maxResults": 10})

    clients["ecs"].describe_services.assert_called_once_with(cluster="prod", services=[arn])
    service = result.payload["services"][0]
    assert service["serviceName"] == "api"
    assert service["runningCount"] == 2
    assert service["createdAt"] is None
    assert "events" not in service


@pytest.mark.asyncio
async def test_list_tasks_with_filters(dispatcher, clients):
    arn = "arn:aws:ecs:us-east-1:123:task/prod/abc"
    clients["ecs"].list_tasks.return_value = {"taskArns": [arn]}
    clients["ecs"].describe_tasks.return_value = {
        "tasks": [
            {
                "taskArn": arn,
                "taskDefinitionArn": "arn:aws:ecs:us-east-1:123:task-definition/api:7",
                "lastStatus": "STOPPED",
                "desiredStatus": "STOPPED",
                "cpu": "256",
                "memory": "512",
                "launchType": "FARGATE",
                "stoppedReason": "Essential container exited",
                "containers": [{"name": "app", "lastStatus": "STOPPED", "exitCode": 1}],
            }
        ]
    }

    result = await dispatcher.invoke(
        "ecs_list_tasks", {"cluster": "prod", "serviceName": "api", "desiredStatus": "STOPPED"}
    )

    clients["ecs"].list_tasks.assert_called_once_with(
        cluster="prod", serviceName="api", desiredStatus="STOPPED"
    )
    task = result.payload["tasks"][0]
    assert result.payload["count"] == 1
    assert task["stoppedReason"] == "Essential container exited"
    assert task["containers"] == [
        {"name": "app", "lastStatus": "STOPPED", "exitCode": 1, "reason": None}
    ]


@pytest.mark.asyncio
async def test_list_tasks_empty(dispatcher, clients):
    clients["ecs"].list_tasks.return_value = {"taskArns": []}

    result = await dispatcher.invoke("ecs_list_tasks", {"cluster": "prod"})

    clients["ecs"].describe_tasks.assert_not_called()
    assert result.payload == {"cluster": "prod", "count": 0, "tasks": []}


@pytest.mark.asyncio
async def test_list_tasks_requires_cluster(dispatcher, clients):
    result = await dispatcher.invoke("ecs_list_tasks", {"serviceName": "api"})

    assert result.kind == "ArgumentValidationError"
    assert ": cluster:" in result.message
    clients["ecs"].list_tasks.assert_not_called()
