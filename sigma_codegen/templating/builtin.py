"""Built-in template set.

Used whenever no external template directory is configured or the configured
directory is missing.  Each entry maps a template name to Jinja2 source; an
external directory overrides the whole set by providing ``<name>.j2`` files
with the same names.
"""

from __future__ import annotations

FLUTTER_MAIN = """\
import 'package:flutter/material.dart';
import 'package:amplify_flutter/amplify_flutter.dart';
import 'package:amplify_datastore/amplify_datastore.dart';
import 'package:amplify_auth_cognito/amplify_auth_cognito.dart';

import 'amplifyconfiguration.dart';
import 'models/ModelProvider.dart';
{% for screen in screens %}
import 'screens/{{ screen.file_name }}';
{% endfor %}

void main() {
  runApp(const {{ class_name }}App());
}

class {{ class_name }}App extends StatefulWidget {
  const {{ class_name }}App({super.key});

  @override
  State<{{ class_name }}App> createState() => _{{ class_name }}AppState();
}

class _{{ class_name }}AppState extends State<{{ class_name }}App> {
  @override
  void initState() {
    super.initState();
    _configureAmplify();
  }

  Future<void> _configureAmplify() async {
    try {
      await Amplify.addPlugins([
        AmplifyDataStore(modelProvider: ModelProvider.instance),
        AmplifyAuthCognito(),
      ]);
      await Amplify.configure(amplifyconfig);
    } catch (e) {
      safePrint('Error configuring Amplify: $e');
    }
  }

  @override
  Widget build(BuildContext context) {
    return MaterialApp(
      title: {{ title }},
      theme: ThemeData(
        colorScheme: ColorScheme.fromSeed(
          seedColor: {{ primary_color }},
          secondary: {{ secondary_color }},
          brightness: Brightness.{{ 'dark' if theme.dark_mode else 'light' }},
        ),
        fontFamily: {{ font_family }},
        useMaterial3: true,
      ),
{% if screens %}
      initialRoute: '{{ home_route }}',
      routes: {
{% for screen in screens %}
        '{{ screen.route }}': (context) => const {{ screen.class_name }}(),
{% endfor %}
      },
{% else %}
      home: const Scaffold(body: Center(child: Text('No screens yet'))),
{% endif %}
    );
  }
}
"""

FLUTTER_SCREEN = """\
import 'package:flutter/material.dart';
{% if uses_datastore %}
import 'package:amplify_flutter/amplify_flutter.dart';

import '../models/ModelProvider.dart';
{% endif %}

class {{ class_name }} extends StatefulWidget {
  const {{ class_name }}({super.key});

  @override
  State<{{ class_name }}> createState() => _{{ class_name }}State();
}

class _{{ class_name }}State extends State<{{ class_name }}> {
{% if uses_forms %}
  final Map<String, GlobalKey<FormState>> _formKeys = {};

{% endif %}
  @override
  Widget build(BuildContext context) {
    return Scaffold(
{% if show_header %}
      appBar: AppBar(
        title: Text({{ title }}),
      ),
{% endif %}
      body: Stack(
        children: [
{% for component in components %}
          {{ component | indent(10) }},
{% endfor %}
        ],
      ),
    );
  }
}
"""

FLUTTER_PUBSPEC = """\
name: {{ package }}
description: {{ description | json }}
publish_to: 'none'
version: 1.0.0+1

environment:
  sdk: ">=3.0.0 <4.0.0"

dependencies:
  flutter:
    sdk: flutter
  amplify_flutter: ^1.0.0
  amplify_datastore: ^1.0.0
  amplify_auth_cognito: ^1.0.0
  cupertino_icons: ^1.0.2

dev_dependencies:
  flutter_test:
    sdk: flutter
  flutter_lints: ^2.0.0

flutter:
  uses-material-design: true
"""

FLUTTER_AMPLIFY_CONFIG = """\
const amplifyconfig = '''{
    "UserAgent": "aws-amplify-cli/2.0",
    "Version": "1.0"
}''';
"""

AMPLIFY_DATA = """\
import { type ClientSchema, a, defineData } from "@aws-amplify/backend";

const schema = a.schema({
{% for model in models %}
  {{ model.name }}: a
    .model({
{% for field in model.fields %}
      {{ field.name }}: a.{{ field.primitive }}(){{ field.constraints }},
{% endfor %}
    })
    .authorization((allow) => [allow.owner()]),
{% if not loop.last %}

{% endif %}
{% endfor %}
});

export type Schema = ClientSchema<typeof schema>;

export const data = defineData({
  schema,
  authorizationModes: {
    defaultAuthorizationMode: "userPool",
  },
});
"""

AMPLIFY_AUTH = """\
import { defineAuth } from "@aws-amplify/backend";

export const auth = defineAuth({
  loginWith: {
    email: true,
  },
  userAttributes: {
    email: {
      required: true,
    },
    givenName: {
      required: true,
    },
    familyName: {
      required: true,
    },
  },
});
"""

AMPLIFY_STORAGE = """\
import { defineStorage } from "@aws-amplify/backend";

export const storage = defineStorage({
  name: "{{ storage_name }}",
  access: (allow) => ({
    "profile-pictures/{entity_id}/*": [
      allow.entity("identity").to(["read", "write", "delete"]),
      allow.authenticated.to(["read"]),
    ],
    "public/*": [
      allow.guest.to(["read"]),
      allow.authenticated.to(["read", "write"]),
    ],
  }),
});
"""

AMPLIFY_BACKEND = """\
import { defineBackend } from "@aws-amplify/backend";
import { auth } from "./auth/resource";
import { data } from "./data/resource";
import { storage } from "./storage/resource";

export const backend = defineBackend({
  auth,
  data,
  storage,
});
"""

GITHUB_DEPLOY = """\
name: {{ workflow_name | json }}

on:
  push:
    branches: [ main ]
  pull_request:
    branches: [ main ]

jobs:
  deploy:
    runs-on: ubuntu-latest

    steps:
      - uses: actions/checkout@v4

      - name: Setup Flutter
        uses: subosito/flutter-action@v2
        with:
          flutter-version: '{{ flutter_version }}'

      - name: Install dependencies
        run: flutter pub get

      - name: Run tests
        run: flutter test

      - name: Build for Android
        run: flutter build apk --release

      - name: Build for iOS
        run: flutter build ios --release --no-codesign

      - name: Configure AWS credentials
        if: github.event_name == 'push'
        uses: aws-actions/configure-aws-credentials@v4
        with:
          aws-access-key-id: {{ '${{ secrets.AWS_ACCESS_KEY_ID }}' }}
          aws-secret-access-key: {{ '${{ secrets.AWS_SECRET_ACCESS_KEY }}' }}
          aws-region: {{ aws_region }}

      - name: Deploy Amplify backend
        if: github.event_name == 'push'
        run: npx ampx pipeline-deploy --branch main --app-id {{ '${{ secrets.AMPLIFY_APP_ID }}' }}
"""

ADMIN_DASHBOARD = """\
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ app_name | e }} Admin Dashboard</title>
    <style>
        body { font-family: Arial, sans-serif; margin: 0; padding: 20px; }
        .header { background: {{ primary_color }}; color: white; padding: 20px; margin: -20px -20px 20px -20px; }
        .card { background: white; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); padding: 20px; margin: 10px 0; }
        .btn { background: {{ primary_color }}; color: white; padding: 10px 20px; border: none; border-radius: 4px; cursor: pointer; }
        table { border-collapse: collapse; width: 100%; margin: 10px 0; }
        th, td { text-align: left; padding: 6px 10px; border-bottom: 1px solid #eee; }
    </style>
</head>
<body>
    <div class="header">
        <h1>{{ app_name | e }} Admin Dashboard</h1>
        <p>Manage your app data and settings</p>
    </div>

    <div class="card">
        <h2>Data Management</h2>
{% if tables %}
        <p>{{ tables | length }} model(s) in the app database</p>
{% for table in each_with_index(tables) %}
        <h3 id="model-{{ table.index }}">{{ table.model_name | e }}</h3>
        <table>
            <thead><tr><th>Field</th><th>Type</th><th>Required</th><th>Unique</th></tr></thead>
            <tbody>
{% for field in table.fields %}
                <tr><td>{{ field.name | e }}</td><td>{{ field.type | e }}</td><td>{{ 'yes' if field.required else 'no' }}</td><td>{{ 'yes' if field.unique else 'no' }}</td></tr>
{% endfor %}
            </tbody>
        </table>
        <button class="btn">View {{ table.model_name | e }} records</button>
{% endfor %}
{% else %}
        <p>This app does not define any database tables yet.</p>
{% endif %}
    </div>

    <div class="card">
        <h2>Analytics</h2>
        <p>View app usage statistics</p>
        <button class="btn">View Analytics</button>
    </div>

    <div class="card">
        <h2>Settings</h2>
        <p>Configure app settings for {{ package_name | e }}</p>
        <button class="btn">Manage Settings</button>
    </div>
</body>
</html>
"""

README = """\
# {{ app_name }}

{{ description }}

Generated Flutter + AWS Amplify project for `{{ package_name }}`.

## Screens

{% for screen in screens %}
- **{{ screen.name }}**{{ ' (home)' if screen.is_home }} -- `lib/screens/{{ screen.file_name }}`
{% endfor %}
{% if not screens %}
- No screens defined.
{% endif %}

## Data models

{% for table in tables %}
- `{{ table.model_name }}` ({{ table.field_count }} field(s))
{% endfor %}
{% if not tables %}
- No data models defined.
{% endif %}

## Getting started

```bash
flutter pub get
npx ampx sandbox
flutter run
```

The admin dashboard lives in `admin/index.html`; the CI pipeline is defined in
`.github/workflows/deploy.yml`.
"""

BUILTIN_TEMPLATES: dict[str, str] = {
    "flutter-main": FLUTTER_MAIN,
    "flutter-screen": FLUTTER_SCREEN,
    "flutter-pubspec": FLUTTER_PUBSPEC,
    "flutter-amplify-config": FLUTTER_AMPLIFY_CONFIG,
    "amplify-data": AMPLIFY_DATA,
    "amplify-auth": AMPLIFY_AUTH,
    "amplify-storage": AMPLIFY_STORAGE,
    "amplify-backend": AMPLIFY_BACKEND,
    "github-deploy": GITHUB_DEPLOY,
    "admin-dashboard": ADMIN_DASHBOARD,
    "readme": README,
}
